"""ORM Models — SQLAlchemy declarative models for the intranet entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from intranet_api.models.department import Department  # noqa: F401
from intranet_api.models.employee import Employee  # noqa: F401
from intranet_api.models.product import Product  # noqa: F401
