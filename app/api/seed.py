"""시드 라우터 — 샘플 데이터 재생성 엔드포인트.

Seed Router — Rebuilds the catalogue from the sample product set.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_product_service
from app.database import get_db
from app.schemas.product import MessageResponse
from app.seed import run_seed
from app.services.product_service import ProductService

router: APIRouter = APIRouter()


@router.get("", response_model=MessageResponse)
async def execute_seed(
    db: Annotated[AsyncSession, Depends(get_db)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> MessageResponse:
    """모든 상품을 삭제하고 샘플 상품을 다시 넣습니다.

    Delete all products and insert the sample set.
    """
    inserted: int = await run_seed(db, service)
    return MessageResponse(message=f"Seed executed: {inserted} products")
