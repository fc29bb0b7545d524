"""상품 관련 Pydantic 요청/응답 스키마 정의.

Product request/response schema definitions.
Responses use the "plain" form: the image collection is flattened to a
list of URL strings.
"""

from datetime import datetime

from pydantic import BaseModel, Field

# 허용 성별 패턴 — Allowed gender values
GENDER_PATTERN: str = r"^(men|women|kid|unisex)$"


class PaginationParams(BaseModel):
    """페이지네이션 쿼리 파라미터.

    Offset/limit pagination parameters for list endpoints.

    Attributes:
        limit: 최대 항목 수 (Maximum number of items, default 10)
        offset: 건너뛸 항목 수 (Number of items to skip, default 0)
    """

    limit: int = Field(10, ge=0)
    offset: int = Field(0, ge=0)


class ProductCreate(BaseModel):
    """상품 생성 요청 스키마.

    Product creation request schema.
    ``slug`` is derived from ``title`` when omitted.

    Attributes:
        title: 상품명 (Product title, unique)
        price: 가격 (Price, optional)
        description: 상세 설명 (Description, optional)
        slug: 슬러그 (Slug, optional)
        stock: 재고 (Stock, optional)
        sizes: 사이즈 목록 (Available sizes)
        gender: 성별 (men/women/kid/unisex)
        tags: 태그 목록 (Tags, default empty)
        images: 이미지 URL 목록, 순서 유지 (Ordered image URLs, default empty)
    """

    title: str = Field(..., min_length=1)
    price: float | None = Field(None, ge=0)
    description: str | None = None
    slug: str | None = None
    stock: int | None = Field(None, ge=0)
    sizes: list[str]
    gender: str = Field(..., pattern=GENDER_PATTERN)
    tags: list[str] = []
    images: list[str] = []


class ProductUpdate(BaseModel):
    """상품 수정 요청 스키마 (부분 업데이트).

    Product update request schema (partial update).
    Only keys present in the request body are applied; ``images`` present
    (even as an empty list) replaces the whole image set.
    """

    title: str | None = Field(None, min_length=1)
    price: float | None = Field(None, ge=0)
    description: str | None = None
    slug: str | None = None
    stock: int | None = Field(None, ge=0)
    sizes: list[str] | None = None
    gender: str | None = Field(None, pattern=GENDER_PATTERN)
    tags: list[str] | None = None
    images: list[str] | None = None


class ProductResponse(BaseModel):
    """상품 응답 스키마 — 이미지는 URL 목록.

    Product response schema in plain form.
    """

    id: str  # 상품 UUID 문자열 (Product UUID as string)
    title: str
    price: float
    description: str | None = None
    slug: str
    stock: int
    sizes: list[str]
    gender: str
    tags: list[str] = []
    images: list[str] = []  # 이미지 URL 목록 (Flattened image URLs)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MessageResponse(BaseModel):
    """단순 메시지 응답 (Simple message response)."""

    message: str
