"""상품 레포지토리 — 상품/이미지 관련 쿼리.

Product Repository — Queries for products and their images.
Extends BaseRepository with term lookup (title or slug), eager image
loading for pages, and bulk deletion of a product's image rows.
"""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.product import Product, ProductImage
from app.repositories.base import BaseRepository


class ProductImageRepository(BaseRepository[ProductImage]):
    """상품 이미지 레포지토리 (Repository for the product_images table)."""

    def __init__(self) -> None:
        super().__init__(ProductImage)


class ProductRepository(BaseRepository[Product]):
    """상품 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the products table.
    """

    def __init__(self, images: ProductImageRepository) -> None:
        super().__init__(Product)
        self.images: ProductImageRepository = images

    async def find_by_term(self, db: AsyncSession, term: str) -> Product | None:
        """제목(대소문자 무시) 또는 슬러그로 상품을 조회합니다.

        Find a product whose lower-cased title OR slug equals the lower-cased
        term. When several rows match, the first one the database returns is
        used.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            term: 검색어 (Title or slug text)

        Returns:
            Product | None: 이미지가 로드된 상품 또는 None
                            (Product with images loaded, or None)
        """
        needle: str = term.lower()
        query: Select = (
            select(Product)
            .options(selectinload(Product.images))
            .where(or_(func.lower(Product.title) == needle, Product.slug == needle))
            .limit(1)
        )
        result = await db.execute(query)
        return result.scalars().first()

    async def get_page_with_images(
        self,
        db: AsyncSession,
        offset: int = 0,
        limit: int = 10,
    ) -> Sequence[Product]:
        """이미지를 포함한 상품 페이지를 조회합니다.

        Retrieve a page of products with their images eagerly loaded.
        """
        query: Select = select(Product).options(selectinload(Product.images))
        return await self.get_page(db, offset=offset, limit=limit, query=query)

    async def delete_images(self, db: AsyncSession, product_id: UUID) -> int:
        """상품의 모든 이미지 행을 일괄 삭제합니다.

        Bulk delete every image row owned by a product.

        Returns:
            int: 삭제된 이미지 수 (Number of deleted image rows)
        """
        return await self.images.delete_where(db, ProductImage.product_id == product_id)

    async def delete_all(self, db: AsyncSession) -> int:
        """모든 상품과 이미지를 삭제합니다.

        Delete every product. Image rows are deleted first so backends
        without enforced foreign keys keep no orphans.

        Returns:
            int: 삭제된 상품 수 (Number of deleted products)
        """
        await self.images.delete_where(db)
        return await self.delete_where(db)


# 싱글턴 인스턴스 — Singleton instances
product_image_repository: ProductImageRepository = ProductImageRepository()
product_repository: ProductRepository = ProductRepository(product_image_repository)
