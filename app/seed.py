"""샘플 상품 시드 스크립트.

Seed script — Replaces the catalogue with a fixed set of sample products.
Every existing product (and its images) is deleted first, then the sample
products are inserted through ProductService.

Usage:
    python -m app.seed
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.database import async_session, engine, Base
from app.logging_config import setup_logging
from app.schemas.product import ProductCreate
from app.services.product_service import ProductService, product_service

logger = logging.getLogger(__name__)

SEED_PRODUCTS: list[dict] = [
    {
        "title": "Men's Chill Crew Neck Sweatshirt",
        "description": "Crew neck sweatshirt in a premium heathered fabric.",
        "price": 75,
        "stock": 7,
        "sizes": ["XS", "S", "M", "L", "XL", "XXL"],
        "gender": "men",
        "tags": ["sweatshirt"],
        "images": ["1740176-00-A_0_2000.jpg", "1740176-00-A_1.jpg"],
    },
    {
        "title": "Men's Quilted Shirt Jacket",
        "description": "Relaxed fit shirt jacket with a quilted lining.",
        "price": 200,
        "stock": 5,
        "sizes": ["XS", "S", "M", "XL", "XXL"],
        "gender": "men",
        "tags": ["jacket"],
        "images": ["1740507-00-A_0_2000.jpg", "1740507-00-A_1.jpg"],
    },
    {
        "title": "Women's Cropped Puffer Jacket",
        "description": "Cropped puffer jacket with a water-resistant shell.",
        "price": 225,
        "stock": 85,
        "sizes": ["XS", "S", "M"],
        "gender": "women",
        "tags": ["hoodie"],
        "images": ["1740535-00-A_0_2000.jpg", "1740535-00-A_1.jpg"],
    },
    {
        "title": "Kids Cybertruck Long Sleeve Tee",
        "description": "Long sleeve cotton tee for kids.",
        "price": 30,
        "stock": 10,
        "sizes": ["XS", "S", "M"],
        "gender": "kid",
        "tags": ["shirt"],
        "images": ["1742694-00-A_1_2000.jpg", "1742694-00-A_3.jpg"],
    },
    {
        "title": "Made on Earth by Humans Onesie",
        "description": "Organic cotton onesie with snap closures.",
        "price": 40,
        "stock": 16,
        "sizes": ["XS", "S"],
        "gender": "unisex",
        "tags": [],
        "images": ["1473829-00-A_2_2000.jpg"],
    },
]


async def run_seed(db: AsyncSession, service: ProductService) -> int:
    """카탈로그를 샘플 상품으로 교체합니다.

    Delete every product, insert the sample products and commit.

    Returns:
        int: 생성된 상품 수 (Number of inserted products)
    """
    deleted: int = await service.delete_all_products(db)
    for item in SEED_PRODUCTS:
        await service.create(db, ProductCreate(**item))
    await db.commit()
    logger.info("Seed executed: %d products removed, %d inserted", deleted, len(SEED_PRODUCTS))
    return len(SEED_PRODUCTS)


async def seed() -> None:
    """테이블을 만들고 시드를 실행합니다 (Create tables, then seed)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        await run_seed(db, product_service)


if __name__ == "__main__":
    setup_logging()
    asyncio.run(seed())
