"""상품 서비스 테스트.

Product service tests — create, list, lookup, update with image
replacement (including rollback), removal, and DB error mapping.
"""

import logging
import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.product import Product, ProductImage
from app.repositories.product_repository import ProductRepository, product_image_repository
from app.schemas.product import PaginationParams, ProductUpdate
from app.services.product_service import ProductService, _is_uuid
from app.utils.exceptions import BadRequestError, DuplicateError, InternalServerError, NotFoundError
from tests.conftest import product_payload


async def _count(db: AsyncSession, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


class TestProductCreate:
    """상품 생성 테스트."""

    async def test_create_returns_flat_images(self, db, service: ProductService):
        """생성 결과의 이미지는 URL 목록."""
        result = await service.create(db, product_payload(images=["a.jpg", "b.jpg"]))
        await db.commit()

        assert result.title == "Red Shoes"
        assert result.images == ["a.jpg", "b.jpg"]
        assert uuid.UUID(result.id)
        assert await _count(db, ProductImage) == 2

    async def test_images_keep_order(self, db, service: ProductService):
        """조회 시 이미지 순서가 생성 순서와 같음."""
        urls = ["i3.jpg", "i1.jpg", "i2.jpg", "i0.jpg"]
        created = await service.create(db, product_payload(images=urls))
        await db.commit()

        found = await service.find_one_plain(db, created.id)
        assert found.images == urls

    async def test_slug_derived_from_title(self, db, service: ProductService):
        """슬러그 미지정 시 제목에서 생성."""
        result = await service.create(db, product_payload(title="Men's Chill Crew"))
        assert result.slug == "mens_chill_crew"

    async def test_supplied_slug_is_normalized(self, db, service: ProductService):
        result = await service.create(db, product_payload(slug="Summer Sale"))
        assert result.slug == "summer_sale"

    async def test_duplicate_title_conflict(self, db, service: ProductService, product):
        """같은 제목으로 두 번 생성 시 409."""
        with pytest.raises(DuplicateError) as exc_info:
            await service.create(db, product_payload(title="Red Shoes", slug="other"))
        assert exc_info.value.status_code == 409
        assert exc_info.value.detail

    async def test_duplicate_slug_conflict(self, db, service: ProductService, product):
        """다른 제목이라도 슬러그가 같으면 409."""
        with pytest.raises(DuplicateError):
            await service.create(db, product_payload(title="Blue Shoes", slug="red_shoes"))

    async def test_session_usable_after_conflict(self, db, service: ProductService, product):
        """중복 오류 후에도 세션 재사용 가능."""
        with pytest.raises(DuplicateError):
            await service.create(db, product_payload())
        await service.create(db, product_payload(title="Green Shoes"))
        await db.commit()
        assert await _count(db, Product) == 2


class TestProductFindAll:
    """상품 목록 조회 테스트."""

    async def test_empty_store_returns_empty_page(self, db, service: ProductService):
        assert await service.find_all(db, PaginationParams()) == []

    async def test_limit_and_offset(self, db, service: ProductService):
        for i in range(3):
            await service.create(db, product_payload(title=f"Shoe {i}", images=[f"{i}.jpg"]))
        await db.commit()

        first = await service.find_all(db, PaginationParams(limit=2, offset=0))
        rest = await service.find_all(db, PaginationParams(limit=2, offset=2))
        assert len(first) == 2
        assert len(rest) == 1
        assert {p.id for p in first}.isdisjoint({p.id for p in rest})
        assert all(len(p.images) == 1 for p in first + rest)

    async def test_offset_past_end(self, db, service: ProductService, product):
        assert await service.find_all(db, PaginationParams(offset=50)) == []


class TestProductFindOne:
    """상품 단건 조회 테스트."""

    async def test_find_by_uuid(self, db, service: ProductService, product):
        found = await service.find_one(db, product.id)
        assert str(found.id) == product.id
        assert [image.url for image in found.images] == ["x.jpg"]

    async def test_find_by_title_case_insensitive(self, db, service: ProductService, product):
        """'Red Shoes' 상품을 'red shoes'로 조회."""
        found = await service.find_one(db, "red shoes")
        assert found.title == "Red Shoes"

    async def test_find_by_slug(self, db, service: ProductService, product):
        found = await service.find_one_plain(db, "RED_SHOES")
        assert found.id == product.id
        assert found.images == ["x.jpg"]

    async def test_unknown_uuid_not_found(self, db, service: ProductService, product):
        term = str(uuid.uuid4())
        with pytest.raises(NotFoundError) as exc_info:
            await service.find_one(db, term)
        assert exc_info.value.detail == f"Product with {term} not found"

    async def test_unknown_text_not_found(self, db, service: ProductService, product):
        with pytest.raises(NotFoundError):
            await service.find_one(db, "purple-hat")

    def test_is_uuid(self):
        assert _is_uuid(str(uuid.uuid4()))
        assert not _is_uuid("red_shoes")
        assert not _is_uuid(uuid.uuid4().hex)


class TestProductUpdate:
    """상품 수정 테스트."""

    async def test_replace_images(self, db, service: ProductService, product):
        """이미지 [x] → [a, b] 교체 후 x 행은 남지 않음."""
        result = await service.update(
            db, uuid.UUID(product.id), ProductUpdate(images=["a.jpg", "b.jpg"])
        )
        assert result.images == ["a.jpg", "b.jpg"]

        leftover = await db.execute(select(ProductImage).where(ProductImage.url == "x.jpg"))
        assert leftover.scalars().first() is None
        assert await _count(db, ProductImage) == 2

    async def test_empty_images_clears_set(self, db, service: ProductService, product):
        result = await service.update(db, uuid.UUID(product.id), ProductUpdate(images=[]))
        assert result.images == []
        assert await _count(db, ProductImage) == 0

    async def test_scalar_update_keeps_images(self, db, service: ProductService, product):
        """images 키가 없으면 기존 이미지 유지."""
        result = await service.update(db, uuid.UUID(product.id), ProductUpdate(title="New"))
        assert result.title == "New"
        assert result.images == ["x.jpg"]
        # 전달하지 않은 필드는 그대로 — omitted fields keep their stored values
        assert result.price == 49.5
        assert result.slug == "red_shoes"

    async def test_explicit_null_only_clears_nullable_fields(self, db, service: ProductService, product):
        result = await service.update(
            db, uuid.UUID(product.id), ProductUpdate(description=None, title=None)
        )
        assert result.description is None
        assert result.title == "Red Shoes"

    async def test_slug_normalized_on_update(self, db, service: ProductService, product):
        result = await service.update(db, uuid.UUID(product.id), ProductUpdate(slug="Red Runner"))
        assert result.slug == "red_runner"

    async def test_unknown_id_bad_request(self, db, service: ProductService, product):
        """존재하지 않는 ID 수정 시 400, 데이터 변경 없음."""
        with pytest.raises(BadRequestError) as exc_info:
            await service.update(db, uuid.uuid4(), ProductUpdate(title="Ghost", images=["g.jpg"]))
        assert exc_info.value.status_code == 400
        assert await _count(db, Product) == 1
        assert (await service.find_one_plain(db, product.id)).images == ["x.jpg"]

    async def test_duplicate_title_conflict(self, db, service: ProductService, product):
        other = await service.create(db, product_payload(title="Blue Shoes"))
        await db.commit()

        with pytest.raises(DuplicateError):
            await service.update(db, uuid.UUID(other.id), ProductUpdate(title="Red Shoes"))
        assert (await service.find_one_plain(db, other.id)).title == "Blue Shoes"

    async def test_failure_after_delete_rolls_back(self, db, product, caplog):
        """이미지 삭제 후 저장 실패 시 롤백 — 기존 이미지 유지."""

        class FailingSaveRepository(ProductRepository):
            async def save(self, db, db_obj):
                raise OperationalError("INSERT INTO product_images", {}, Exception("connection lost"))

        failing = ProductService(
            FailingSaveRepository(product_image_repository),
            logging.getLogger("tests.failing_service"),
        )

        with caplog.at_level(logging.ERROR, logger="tests.failing_service"):
            with pytest.raises(InternalServerError) as exc_info:
                await failing.update(db, uuid.UUID(product.id), ProductUpdate(images=["a.jpg", "b.jpg"]))

        assert exc_info.value.detail == "Please check server logs"
        assert "connection lost" in caplog.text

        found = await failing.find_one_plain(db, product.id)
        assert found.images == ["x.jpg"]
        assert await _count(db, ProductImage) == 1


class TestProductRemove:
    """상품 삭제 테스트."""

    async def test_remove_returns_prior_state(self, db, service: ProductService, product):
        removed = await service.remove(db, product.id)
        await db.commit()

        assert removed.id == product.id
        assert removed.images == ["x.jpg"]
        with pytest.raises(NotFoundError):
            await service.find_one(db, product.id)
        assert await _count(db, ProductImage) == 0

    async def test_remove_by_slug(self, db, service: ProductService, product):
        await service.remove(db, "red_shoes")
        await db.commit()
        assert await _count(db, Product) == 0

    async def test_remove_unknown(self, db, service: ProductService):
        with pytest.raises(NotFoundError):
            await service.remove(db, str(uuid.uuid4()))

    async def test_delete_all_products(self, db, service: ProductService, product):
        await service.create(db, product_payload(title="Blue Shoes", images=["b.jpg"]))
        deleted = await service.delete_all_products(db)
        await db.commit()

        assert deleted == 2
        assert await _count(db, Product) == 0
        assert await _count(db, ProductImage) == 0


class FakePgError(Exception):
    """asyncpg 스타일 드라이버 오류 (asyncpg-style driver error)."""

    def __init__(self, sqlstate: str, detail: str) -> None:
        super().__init__(detail)
        self.sqlstate = sqlstate
        self.detail = detail


class TestErrorMapping:
    """DB 오류 변환 테스트."""

    def test_unique_violation_carries_detail(self, service: ProductService):
        exc = IntegrityError("INSERT", {}, FakePgError("23505", "Key (title)=(Red Shoes) already exists."))
        with pytest.raises(DuplicateError) as exc_info:
            service._handle_db_errors(exc)
        assert exc_info.value.detail == "Key (title)=(Red Shoes) already exists."

    def test_other_integrity_error_is_internal(self, service: ProductService, caplog):
        exc = IntegrityError("INSERT", {}, FakePgError("23502", "null value in column"))
        with caplog.at_level(logging.ERROR, logger="tests.product_service"):
            with pytest.raises(InternalServerError) as exc_info:
                service._handle_db_errors(exc)
        assert exc_info.value.detail == "Please check server logs"
        assert "null value in column" in caplog.text

    def test_operational_error_is_internal(self, service: ProductService):
        exc = OperationalError("SELECT 1", {}, Exception("server closed the connection"))
        with pytest.raises(InternalServerError) as exc_info:
            service._handle_db_errors(exc)
        assert "server closed" not in exc_info.value.detail
