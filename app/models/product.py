"""상품 관련 SQLAlchemy ORM 모델 정의.

Product-related SQLAlchemy ORM model definitions.
A Product exclusively owns its ProductImage rows: replacing the image set
or deleting the product deletes the images with it.

Tables:
    - products: 상품 (Product catalogue entries)
    - product_images: 상품 이미지 (Image URLs owned by a product)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String, Text, Uuid, event
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

# 문자열 목록 컬럼 — PostgreSQL에서는 JSONB, 그 외(SQLite)에서는 JSON
# String-list column type: JSONB on PostgreSQL, plain JSON elsewhere
StringList = JSON().with_variant(JSONB(), "postgresql")


def normalize_slug(value: str) -> str:
    """슬러그 정규화 — 소문자, 공백은 '_', 작은따옴표 제거.

    Normalize a slug: lower-case, spaces to underscores, apostrophes removed.
    """
    return value.lower().replace(" ", "_").replace("'", "")


class Product(Base):
    """상품 모델.

    Product model. ``title`` and ``slug`` are each unique across the table.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier, generated on insert)
        title: 상품명, 유니크 (Product title, unique)
        price: 가격 (Price, default 0)
        description: 상세 설명 (Description, optional)
        slug: URL용 식별자, 유니크 (URL-safe identifier, unique)
        stock: 재고 수량 (Units in stock, default 0)
        sizes: 사이즈 목록 (Available sizes)
        gender: 대상 성별 (Target gender: men/women/kid/unisex)
        tags: 태그 목록 (Free-form tags)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        images: 상품 이미지 목록, id 순 (Owned images in insertion order, cascade delete)
    """

    __tablename__ = "products"

    # 상품 고유 식별자 — Product unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    slug: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sizes: Mapped[list[str]] = mapped_column(StringList, nullable=False, default=list)
    gender: Mapped[str] = mapped_column(String(20), nullable=False)
    tags: Mapped[list[str]] = mapped_column(StringList, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # selectin: 상품을 조회하면 이미지도 함께 로드 (images load with every product query)
    images: Mapped[list["ProductImage"]] = relationship(
        back_populates="product",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ProductImage.id",
        lazy="selectin",
    )


class ProductImage(Base):
    """상품 이미지 모델 — 상품에 종속된 이미지 URL.

    Product image model. Belongs to exactly one product.

    Attributes:
        id: 자동 증가 식별자 (Auto-increment identifier, also the display order)
        url: 이미지 URL (Image URL)
        product_id: 소유 상품 FK (Owning product foreign key, ON DELETE CASCADE)
    """

    __tablename__ = "product_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    product_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True
    )

    product: Mapped[Product] = relationship(back_populates="images")


@event.listens_for(Product, "before_insert")
def _slug_before_insert(mapper, connection, target: Product) -> None:
    # 슬러그 미지정 시 제목에서 생성 — derive from title when absent
    target.slug = normalize_slug(target.slug or target.title)


@event.listens_for(Product, "before_update")
def _slug_before_update(mapper, connection, target: Product) -> None:
    target.slug = normalize_slug(target.slug)
