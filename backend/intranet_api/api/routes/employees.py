"""Employee Routes — CRUD over /api/employees plus lookup by department.

Invariants:
    - POST returns 201 with a Location header for the new resource
    - PUT/DELETE return 204, or 404 when the employee does not exist
    - GET /bydepartment/{id} returns [] for an unknown or empty department
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from intranet_api.infrastructure.database import get_db
from intranet_api.schemas.employee import EmployeeResponse, EmployeeWrite
from intranet_api.services.entity_service import EmployeeService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/employees", tags=["employees"])


def get_employee_service(db: AsyncSession = Depends(get_db)) -> EmployeeService:
    return EmployeeService(db)


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    service: EmployeeService = Depends(get_employee_service),
):
    return await service.list_all()


@router.get(
    "/bydepartment/{department_id}", response_model=list[EmployeeResponse],
)
async def list_employees_by_department(
    department_id: int,
    service: EmployeeService = Depends(get_employee_service),
):
    """Employees of one department (no existence check on the department)."""
    return await service.list_by_department(department_id)


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: int, service: EmployeeService = Depends(get_employee_service),
):
    return await service.get(employee_id)


@router.post(
    "", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED,
)
async def create_employee(
    body: EmployeeWrite,
    request: Request,
    response: Response,
    service: EmployeeService = Depends(get_employee_service),
):
    created = await service.create(body)
    response.headers["Location"] = str(
        request.url_for("get_employee", employee_id=created.id),
    )
    return created


@router.put(
    "/{employee_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def update_employee(
    employee_id: int,
    body: EmployeeWrite,
    service: EmployeeService = Depends(get_employee_service),
):
    await service.update(employee_id, body)


@router.delete(
    "/{employee_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_employee(
    employee_id: int, service: EmployeeService = Depends(get_employee_service),
):
    await service.delete(employee_id)
