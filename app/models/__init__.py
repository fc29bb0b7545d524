"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    product: 상품 및 상품 이미지 (Product and ProductImage)
"""

from app.models.product import Product, ProductImage

__all__ = ["Product", "ProductImage"]
