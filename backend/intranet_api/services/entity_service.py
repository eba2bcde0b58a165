"""Entity Services — DTO mapping and logging around the entity repositories.

Invariants:
    - Services return response schemas, never ORM instances
    - A missing entity raises ResourceNotFoundError (404 via the global handler)
    - update() issues a single UPDATE; "no row affected" is treated as not found

Design Decisions:
    - One generic EntityService; per-entity subclasses only declare names/types
      and add their extra queries
"""

import logging
from typing import Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from intranet_api.core.errors import ResourceNotFoundError
from intranet_api.db.base import Base
from intranet_api.infrastructure.repositories import (
    DepartmentRepository, EmployeeRepository, ProductRepository,
    SqlAlchemyRepository,
)
from intranet_api.models.department import Department
from intranet_api.models.employee import Employee
from intranet_api.models.product import Product
from intranet_api.schemas.department import DepartmentResponse, DepartmentWrite
from intranet_api.schemas.employee import EmployeeResponse, EmployeeWrite
from intranet_api.schemas.product import ProductResponse, ProductWrite

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
WriteT = TypeVar("WriteT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class EntityService(Generic[ModelT, WriteT, ResponseT]):
    """CRUD use cases for one entity type."""

    entity_name: str
    model: type[ModelT]
    response_schema: type[ResponseT]
    repository_class: type[SqlAlchemyRepository]

    def __init__(self, db: AsyncSession):
        self._repo = self.repository_class(db)

    def _to_response(self, entity: ModelT) -> ResponseT:
        return self.response_schema.model_validate(entity)

    async def list_all(self) -> list[ResponseT]:
        entities = await self._repo.get_all()
        logger.info(f"Retrieved {len(entities)} {self.entity_name} record(s)")
        return [self._to_response(e) for e in entities]

    async def get(self, entity_id: int) -> ResponseT:
        entity = await self._repo.get_by_id(entity_id)
        if entity is None:
            raise ResourceNotFoundError(self.entity_name, entity_id)
        return self._to_response(entity)

    async def create(self, body: WriteT) -> ResponseT:
        entity = await self._repo.add(self.model(**body.model_dump()))
        logger.info(
            f"{self.entity_name} created",
            extra={"entity_id": entity.id},
        )
        return self._to_response(entity)

    async def update(self, entity_id: int, body: WriteT) -> None:
        updated = await self._repo.update(
            self.model(id=entity_id, **body.model_dump()),
        )
        if not updated:
            raise ResourceNotFoundError(self.entity_name, entity_id)
        logger.info(
            f"{self.entity_name} updated",
            extra={"entity_id": entity_id},
        )

    async def delete(self, entity_id: int) -> None:
        if not await self._repo.delete(entity_id):
            raise ResourceNotFoundError(self.entity_name, entity_id)
        logger.info(
            f"{self.entity_name} deleted",
            extra={"entity_id": entity_id},
        )


class DepartmentService(
    EntityService[Department, DepartmentWrite, DepartmentResponse],
):
    entity_name = "Department"
    model = Department
    response_schema = DepartmentResponse
    repository_class = DepartmentRepository


class ProductService(EntityService[Product, ProductWrite, ProductResponse]):
    entity_name = "Product"
    model = Product
    response_schema = ProductResponse
    repository_class = ProductRepository


class EmployeeService(EntityService[Employee, EmployeeWrite, EmployeeResponse]):
    entity_name = "Employee"
    model = Employee
    response_schema = EmployeeResponse
    repository_class = EmployeeRepository

    async def list_by_department(
        self, department_id: int,
    ) -> list[EmployeeResponse]:
        employees = await self._repo.get_by_department(department_id)
        logger.info(
            f"Retrieved {len(employees)} employee(s) for department "
            f"{department_id}",
        )
        return [self._to_response(e) for e in employees]
