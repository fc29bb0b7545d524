"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Every test gets a fresh database: the schema is created on a new
aiosqlite engine and discarded with it.
"""

import logging
import os
from collections.abc import AsyncGenerator

# 앱 임포트 전에 테스트 DB URL 설정 — must be set before app modules are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.repositories.product_repository import product_repository
from app.schemas.product import ProductCreate
from app.services.product_service import ProductService

TEST_DATABASE_URL = "sqlite+aiosqlite://"


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite는 기본적으로 FK 비활성 — ON DELETE CASCADE 적용을 위해 활성화
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 새 스키마를 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(eng.sync_engine, "connect", _enable_foreign_keys)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 서비스 및 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest.fixture
def service() -> ProductService:
    """테스트 로거를 주입한 상품 서비스."""
    return ProductService(product_repository, logging.getLogger("tests.product_service"))


def product_payload(title: str = "Red Shoes", **overrides) -> ProductCreate:
    """상품 생성 데이터를 만듭니다."""
    data: dict = {
        "title": title,
        "price": 49.5,
        "description": "Running shoes",
        "stock": 3,
        "sizes": ["M", "L"],
        "gender": "unisex",
        "tags": ["shoes"],
        "images": [],
    }
    data.update(overrides)
    return ProductCreate(**data)


@pytest_asyncio.fixture
async def product(db: AsyncSession, service: ProductService):
    """이미지 1개(x)를 가진 커밋된 상품을 생성합니다."""
    created = await service.create(db, product_payload(images=["x.jpg"]))
    await db.commit()
    return created
