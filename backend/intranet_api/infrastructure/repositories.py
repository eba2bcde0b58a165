"""Entity Repositories — one SQLAlchemy repository per entity over a request-scoped session.

Invariants:
    - Each write commits its own unit of work (one statement per request)
    - update()/delete() report whether a row was affected; "not found" is False, not an error
    - get_all() ordered by id for stable listings

Design Decisions:
    - Generic base with a `model` class attribute; entity repositories only add
      their extra queries
"""

from typing import Generic, Sequence, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from intranet_api.db.base import Base
from intranet_api.models.department import Department
from intranet_api.models.employee import Employee
from intranet_api.models.product import Product

ModelT = TypeVar("ModelT", bound=Base)


class SqlAlchemyRepository(Generic[ModelT]):
    """CRUD over a single mapped class with an integer `id` primary key."""

    model: type[ModelT]

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get_by_id(self, entity_id: int) -> ModelT | None:
        return await self._db.get(self.model, entity_id)

    async def get_all(self) -> Sequence[ModelT]:
        result = await self._db.execute(
            select(self.model).order_by(self.model.id),
        )
        return result.scalars().all()

    async def add(self, entity: ModelT) -> ModelT:
        self._db.add(entity)
        await self._db.commit()
        await self._db.refresh(entity)
        return entity

    async def update(self, entity: ModelT) -> bool:
        values = {
            column.key: getattr(entity, column.key)
            for column in self.model.__table__.columns
            if column.key != "id"
        }
        result = await self._db.execute(
            update(self.model)
            .where(self.model.id == entity.id)
            .values(**values),
        )
        await self._db.commit()
        return result.rowcount > 0

    async def delete(self, entity_id: int) -> bool:
        result = await self._db.execute(
            delete(self.model).where(self.model.id == entity_id),
        )
        await self._db.commit()
        return result.rowcount > 0


class DepartmentRepository(SqlAlchemyRepository[Department]):
    model = Department


class ProductRepository(SqlAlchemyRepository[Product]):
    model = Product


class EmployeeRepository(SqlAlchemyRepository[Employee]):
    model = Employee

    async def get_by_department(self, department_id: int) -> Sequence[Employee]:
        result = await self._db.execute(
            select(Employee)
            .where(Employee.department_id == department_id)
            .order_by(Employee.id),
        )
        return result.scalars().all()

