"""Department ORM — organizational unit referenced by employees.

Invariants:
    - name is non-nullable, location optional
    - Deleting a department leaves its employees with department_id NULL
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from intranet_api.db.base import Base


class Department(Base):
    __tablename__ = "departments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
