"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.
Provides generic create/read/merge/delete operations. Repositories only
flush; committing is left to the caller (router or transaction scope).

Usage:
    class ProductRepository(BaseRepository[Product]):
        def __init__(self) -> None:
            super().__init__(Product)
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from app.database import Base

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository providing common database operations.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        """레포지토리를 초기화합니다.

        Args:
            model: 이 레포지토리가 관리할 SQLAlchemy 모델 클래스
                   (SQLAlchemy model class this repository manages)
        """
        self.model: type[ModelType] = model

    async def get_by_id(
        self,
        db: AsyncSession,
        record_id: UUID,
        options: Sequence[ORMOption] = (),
    ) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by its primary key.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 UUID (UUID of the record to retrieve)
            options: 로더 옵션 (Loader options, e.g. noload/selectinload)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        query: Select = select(self.model).where(self.model.id == record_id)
        if options:
            query = query.options(*options)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_page(
        self,
        db: AsyncSession,
        offset: int = 0,
        limit: int = 10,
        query: Select | None = None,
    ) -> Sequence[ModelType]:
        """OFFSET/LIMIT 페이지를 조회합니다.

        Retrieve one page of records. No total count is computed.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            offset: 건너뛸 레코드 수 (Number of records to skip)
            limit: 최대 레코드 수 (Maximum number of records)
            query: 기본 SELECT 쿼리, None이면 전체 테이블
                   (Base SELECT query; whole table when None)

        Returns:
            Sequence[ModelType]: 레코드 목록 (Records on the page)
        """
        if query is None:
            query = select(self.model)
        result = await db.execute(query.offset(offset).limit(limit))
        return result.scalars().all()

    async def add(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        """새 엔티티를 세션에 추가하고 flush 합니다.

        Add a new entity (and its cascaded children) and flush the INSERTs.
        """
        db.add(db_obj)
        await db.flush()
        return db_obj

    async def save(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        """변경된 엔티티를 flush 합니다 (Flush pending changes of an entity)."""
        db.add(db_obj)
        await db.flush()
        return db_obj

    async def preload(
        self,
        db: AsyncSession,
        record_id: UUID,
        update_data: dict[str, Any],
        options: Sequence[ORMOption] = (),
    ) -> ModelType | None:
        """현재 레코드를 읽고 전달된 필드만 덮어씁니다.

        Read the current row and overlay only the keys present in
        ``update_data``. The row is re-read even if the object is already in
        the session, so the overlay starts from the persisted state. Nothing
        is flushed; the caller decides when to write.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 대상 레코드 UUID (UUID of the record to merge into)
            update_data: 덮어쓸 필드 딕셔너리 (Fields to overlay)
            options: 로더 옵션 (Loader options)

        Returns:
            ModelType | None: 병합된 레코드 또는 None (Merged record or None)
        """
        query: Select = (
            select(self.model)
            .where(self.model.id == record_id)
            .execution_options(populate_existing=True)
        )
        if options:
            query = query.options(*options)
        result = await db.execute(query)
        db_obj: ModelType | None = result.scalar_one_or_none()
        if db_obj is None:
            return None

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        return db_obj

    async def remove(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        """엔티티를 삭제하고 flush 합니다 (Delete an entity and flush)."""
        await db.delete(db_obj)
        await db.flush()
        return db_obj

    async def delete_where(self, db: AsyncSession, *criteria: Any) -> int:
        """조건에 맞는 레코드를 일괄 삭제합니다.

        Bulk DELETE rows matching ``criteria`` (all rows when none given).
        Objects already loaded in the session are not synchronized.

        Returns:
            int: 삭제된 행 수 (Number of deleted rows)
        """
        stmt = delete(self.model).where(*criteria).execution_options(synchronize_session=False)
        result = await db.execute(stmt)
        return result.rowcount or 0
