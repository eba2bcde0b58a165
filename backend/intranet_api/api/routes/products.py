"""Product Routes — CRUD over /api/products.

Invariants:
    - POST returns 201 with a Location header for the new resource
    - PUT/DELETE return 204, or 404 when the product does not exist
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from intranet_api.infrastructure.database import get_db
from intranet_api.schemas.product import ProductResponse, ProductWrite
from intranet_api.services.entity_service import ProductService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/products", tags=["products"])


def get_product_service(db: AsyncSession = Depends(get_db)) -> ProductService:
    return ProductService(db)


@router.get("", response_model=list[ProductResponse])
async def list_products(service: ProductService = Depends(get_product_service)):
    return await service.list_all()


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int, service: ProductService = Depends(get_product_service),
):
    return await service.get(product_id)


@router.post(
    "", response_model=ProductResponse, status_code=status.HTTP_201_CREATED,
)
async def create_product(
    body: ProductWrite,
    request: Request,
    response: Response,
    service: ProductService = Depends(get_product_service),
):
    created = await service.create(body)
    response.headers["Location"] = str(
        request.url_for("get_product", product_id=created.id),
    )
    return created


@router.put(
    "/{product_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def update_product(
    product_id: int,
    body: ProductWrite,
    service: ProductService = Depends(get_product_service),
):
    await service.update(product_id, body)


@router.delete(
    "/{product_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_product(
    product_id: int, service: ProductService = Depends(get_product_service),
):
    await service.delete(product_id)
