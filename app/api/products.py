"""상품 라우터 — 상품 CRUD 엔드포인트.

Product Router — CRUD endpoints for the product catalogue.
Lookups and deletion accept a UUID, slug or title; update requires the UUID.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_product_service
from app.database import get_db
from app.schemas.product import PaginationParams, ProductCreate, ProductResponse, ProductUpdate
from app.services.product_service import ProductService

router: APIRouter = APIRouter()


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    data: ProductCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductResponse:
    """새 상품을 생성합니다.

    Create a product with its images.
    """
    result: ProductResponse = await service.create(db, data)
    await db.commit()
    return result


@router.get("", response_model=list[ProductResponse])
async def list_products(
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[ProductService, Depends(get_product_service)],
    limit: Annotated[int, Query(ge=0)] = 10,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[ProductResponse]:
    """상품 목록을 페이지 단위로 조회합니다.

    List products, ``limit`` items starting at ``offset``.
    """
    return await service.find_all(db, PaginationParams(limit=limit, offset=offset))


@router.get("/{term}", response_model=ProductResponse)
async def get_product(
    term: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductResponse:
    """UUID, 슬러그 또는 제목으로 상품을 조회합니다.

    Retrieve a product by UUID, slug or title (case-insensitive).
    """
    return await service.find_one_plain(db, term)


@router.patch("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: UUID,
    data: ProductUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductResponse:
    """상품을 부분 수정합니다. 트랜잭션 커밋은 서비스가 담당.

    Partially update a product. The service commits its own transaction.
    """
    return await service.update(db, product_id, data)


@router.delete("/{term}", response_model=ProductResponse)
async def delete_product(
    term: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductResponse:
    """상품을 삭제하고 삭제 직전 상태를 반환합니다.

    Delete a product and return its state before deletion.
    """
    result: ProductResponse = await service.remove(db, term)
    await db.commit()
    return result
