"""Department Routes — CRUD over /api/departments.

Invariants:
    - POST returns 201 with a Location header for the new resource
    - PUT/DELETE return 204, or 404 when the department does not exist
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from intranet_api.infrastructure.database import get_db
from intranet_api.schemas.department import DepartmentResponse, DepartmentWrite
from intranet_api.services.entity_service import DepartmentService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/departments", tags=["departments"])


def get_department_service(db: AsyncSession = Depends(get_db)) -> DepartmentService:
    return DepartmentService(db)


@router.get("", response_model=list[DepartmentResponse])
async def list_departments(service: DepartmentService = Depends(get_department_service)):
    return await service.list_all()


@router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(
    department_id: int, service: DepartmentService = Depends(get_department_service),
):
    return await service.get(department_id)


@router.post(
    "", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED,
)
async def create_department(
    body: DepartmentWrite,
    request: Request,
    response: Response,
    service: DepartmentService = Depends(get_department_service),
):
    created = await service.create(body)
    response.headers["Location"] = str(
        request.url_for("get_department", department_id=created.id),
    )
    return created


@router.put(
    "/{department_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def update_department(
    department_id: int,
    body: DepartmentWrite,
    service: DepartmentService = Depends(get_department_service),
):
    await service.update(department_id, body)


@router.delete(
    "/{department_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_department(
    department_id: int, service: DepartmentService = Depends(get_department_service),
):
    await service.delete(department_id)
