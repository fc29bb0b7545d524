"""상품 서비스 — 상품 CRUD 비즈니스 로직.

Product Service — Business logic for product CRUD operations.
Handles creation, paginated listing, id/slug/title lookup, partial update
with transactional image replacement, and deletion. Every persistence
failure goes through one error-mapping policy: uniqueness violations
become 409 responses carrying the constraint detail, anything else is
logged and surfaced as a detail-free 500.
"""

import logging
from typing import NoReturn
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import noload, selectinload

from app.database import transaction
from app.models.product import Product, ProductImage
from app.repositories.product_repository import ProductRepository, product_repository
from app.schemas.product import PaginationParams, ProductCreate, ProductResponse, ProductUpdate
from app.utils.exceptions import BadRequestError, DuplicateError, InternalServerError, NotFoundError

# PostgreSQL unique_violation SQLSTATE
UNIQUE_VIOLATION: str = "23505"
# SQLite 확장 에러 코드 이름 (Python 3.11+ sqlite3)
SQLITE_UNIQUE_VIOLATION: str = "SQLITE_CONSTRAINT_UNIQUE"

# 명시적 null 로 비울 수 있는 필드 — 그 외 필드의 null 은 "변경 없음"으로 처리
# Fields that may be cleared with an explicit null; null elsewhere means "unchanged"
NULLABLE_FIELDS: frozenset[str] = frozenset({"description"})


def _is_uuid(term: str) -> bool:
    """정규 형식 UUID 문자열인지 확인 (Canonical hyphenated UUID check)."""
    try:
        return str(UUID(term)) == term.lower()
    except ValueError:
        return False


def _is_unique_violation(exc: IntegrityError) -> bool:
    """드라이버 에러가 유니크 제약 위반인지 판별합니다.

    asyncpg errors carry the SQLSTATE; sqlite3 errors carry an extended
    error name (or, on older interpreters, only the message).
    """
    orig = exc.orig
    if UNIQUE_VIOLATION in (getattr(orig, "sqlstate", None), getattr(orig, "pgcode", None)):
        return True
    if getattr(orig, "sqlite_errorname", None) == SQLITE_UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(orig)


def _constraint_detail(exc: IntegrityError) -> str:
    """제약 위반 상세 메시지 추출 — e.g. 'Key (title)=(Red Shoes) already exists.'"""
    orig = exc.orig
    for source in (getattr(orig, "__cause__", None), orig):
        detail = getattr(source, "detail", None)
        if detail:
            return str(detail)
    return str(orig)


class ProductService:
    """상품 관련 비즈니스 로직을 처리하는 서비스.

    Service handling product business logic.

    Attributes:
        repository: 상품 레포지토리 (Product repository)
        logger: 내부 오류 기록용 로거 (Logger receiving internal errors)
    """

    def __init__(
        self,
        repository: ProductRepository,
        logger: logging.Logger,
    ) -> None:
        self.repository: ProductRepository = repository
        self.logger: logging.Logger = logger

    def _to_response(self, product: Product, images: list[str] | None = None) -> ProductResponse:
        """상품 모델을 평면 응답 스키마로 변환합니다.

        Convert a Product into its plain form (image URLs instead of objects).

        Args:
            product: 상품 모델 (Product model instance)
            images: 이미지 URL 목록, None이면 product.images에서 추출
                    (Image URLs; taken from product.images when None)
        """
        if images is None:
            images = [image.url for image in product.images]
        return ProductResponse(
            id=str(product.id),
            title=product.title,
            price=product.price,
            description=product.description,
            slug=product.slug,
            stock=product.stock,
            sizes=list(product.sizes or []),
            gender=product.gender,
            tags=list(product.tags or []),
            images=images,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )

    def _handle_db_errors(self, exc: SQLAlchemyError) -> NoReturn:
        """DB 오류를 HTTP 예외로 변환합니다.

        Map a persistence error to the caller-facing error.

        Raises:
            DuplicateError: 유니크 제약 위반 (Uniqueness violation, with its detail)
            InternalServerError: 그 외 모든 오류, 서버 로그에만 상세 기록
                                 (Anything else; details only in server logs)
        """
        if isinstance(exc, IntegrityError) and _is_unique_violation(exc):
            raise DuplicateError(_constraint_detail(exc)) from exc
        self.logger.error("Unexpected database error: %s", exc, exc_info=exc)
        raise InternalServerError() from exc

    async def create(self, db: AsyncSession, data: ProductCreate) -> ProductResponse:
        """새 상품을 이미지와 함께 생성합니다.

        Create a product and one ProductImage per URL in a single flush.
        The caller commits.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 상품 생성 데이터 (Product creation data)

        Returns:
            ProductResponse: 생성된 상품, 이미지는 URL 목록
                             (Created product with flat image URLs)

        Raises:
            DuplicateError: 제목/슬러그 중복 (Duplicate title or slug)
            InternalServerError: 기타 DB 오류 (Other persistence failure)
        """
        fields: dict = data.model_dump(exclude={"images"}, exclude_none=True)
        product: Product = Product(
            **fields,
            images=[ProductImage(url=url) for url in data.images],
        )
        try:
            await self.repository.add(db, product)
        except SQLAlchemyError as exc:
            await db.rollback()
            self._handle_db_errors(exc)
        return self._to_response(product, images=list(data.images))

    async def find_all(
        self,
        db: AsyncSession,
        pagination: PaginationParams,
    ) -> list[ProductResponse]:
        """상품 페이지를 조회합니다. 범위를 벗어난 offset은 빈 목록.

        List one page of products with flattened image URLs.
        An offset past the end yields an empty list.
        """
        try:
            products = await self.repository.get_page_with_images(
                db, offset=pagination.offset, limit=pagination.limit
            )
        except SQLAlchemyError as exc:
            self._handle_db_errors(exc)
        return [self._to_response(p) for p in products]

    async def find_one(self, db: AsyncSession, term: str) -> Product:
        """UUID 또는 제목/슬러그로 상품 하나를 조회합니다.

        Look a product up by UUID when ``term`` is one, otherwise by
        case-insensitive title or slug. Images are loaded as objects.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            term: UUID, 슬러그 또는 제목 (UUID, slug or title)

        Returns:
            Product: 이미지가 로드된 상품 (Product with images loaded)

        Raises:
            NotFoundError: 일치하는 상품 없음 (No product matches the term)
        """
        try:
            if _is_uuid(term):
                product = await self.repository.get_by_id(
                    db, UUID(term), options=(selectinload(Product.images),)
                )
            else:
                product = await self.repository.find_by_term(db, term)
        except SQLAlchemyError as exc:
            self._handle_db_errors(exc)

        if product is None:
            raise NotFoundError(f"Product with {term} not found")
        return product

    async def find_one_plain(self, db: AsyncSession, term: str) -> ProductResponse:
        """find_one 결과를 평면 형태로 변환합니다 (Plain form of find_one)."""
        product: Product = await self.find_one(db, term)
        return self._to_response(product)

    async def update(
        self,
        db: AsyncSession,
        product_id: UUID,
        data: ProductUpdate,
    ) -> ProductResponse:
        """상품을 부분 수정하고, 이미지가 주어지면 트랜잭션 안에서 교체합니다.

        Partially update a product. Only keys present in the request body are
        overlaid onto the stored row. When ``images`` is present (even empty)
        the old image rows are deleted and the new ones inserted in the same
        transaction as the product write; any failure rolls everything back.
        The transaction scope commits and releases the session itself.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            product_id: 상품 ID (Product UUID)
            data: 수정 데이터 (Update data)

        Returns:
            ProductResponse: 수정된 상품 (Updated product, plain form)

        Raises:
            BadRequestError: 상품 ID가 존재하지 않음 (Unknown product id)
            DuplicateError: 제목/슬러그 중복 (Duplicate title or slug)
            InternalServerError: 기타 DB 오류 (Other persistence failure)
        """
        update_data: dict = data.model_dump(exclude_unset=True)
        images: list[str] | None = update_data.pop("images", None)
        update_data = {
            field: value
            for field, value in update_data.items()
            if value is not None or field in NULLABLE_FIELDS
        }

        # 이미지 컬렉션은 로드하지 않음 — 교체 시 일괄 삭제 후 새로 연결
        # Images are not loaded: replacement bulk-deletes rows, then attaches new ones
        try:
            product: Product | None = await self.repository.preload(
                db, product_id, update_data, options=(noload(Product.images),)
            )
        except SQLAlchemyError as exc:
            self._handle_db_errors(exc)
        if product is None:
            raise BadRequestError(f"Product with id: {product_id} was not found")

        try:
            async with transaction(db):
                if images is not None:
                    await self.repository.delete_images(db, product_id)
                    product.images = [ProductImage(url=url) for url in images]
                await self.repository.save(db, product)
        except SQLAlchemyError as exc:
            self._handle_db_errors(exc)

        return await self.find_one_plain(db, str(product_id))

    async def remove(self, db: AsyncSession, term: str) -> ProductResponse:
        """상품을 삭제합니다. 이미지는 함께 삭제.

        Delete the product matched by ``term`` (same resolution as find_one).
        The caller commits.

        Returns:
            ProductResponse: 삭제 직전 상태 (State immediately before deletion)

        Raises:
            NotFoundError: 일치하는 상품 없음 (No product matches the term)
        """
        product: Product = await self.find_one(db, term)
        snapshot: ProductResponse = self._to_response(product)
        try:
            await self.repository.remove(db, product)
        except SQLAlchemyError as exc:
            await db.rollback()
            self._handle_db_errors(exc)
        return snapshot

    async def delete_all_products(self, db: AsyncSession) -> int:
        """모든 상품을 삭제합니다 (시드용).

        Delete every product and image. Used by the seed routine.

        Returns:
            int: 삭제된 상품 수 (Number of deleted products)
        """
        try:
            return await self.repository.delete_all(db)
        except SQLAlchemyError as exc:
            await db.rollback()
            self._handle_db_errors(exc)


# 싱글턴 인스턴스 — Singleton instance
product_service: ProductService = ProductService(product_repository, logging.getLogger(__name__))
