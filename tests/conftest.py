"""
Test fixtures using async SQLite for fast, isolated tests.
No PostgreSQL required for unit tests.
"""
import os

# Must be set before user_api reads its cached settings.
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from user_api.config import Settings, get_settings
from user_api.core.dependencies import get_db, get_image_storage
from user_api.db.base import Base
from user_api.main import app
from user_api.users.models import User  # noqa: F401
from user_api.users.storage import LocalImageStorage


@pytest_asyncio.fixture
async def db():
    """Create a fresh in-memory SQLite database for each test."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def storage(upload_dir) -> LocalImageStorage:
    return LocalImageStorage(upload_dir)


@pytest.fixture
def settings() -> Settings:
    """Settings served to request handlers; tests may mutate before calling."""
    return Settings(bcrypt_rounds=4)


@pytest_asyncio.fixture
async def client(db: AsyncSession, storage: LocalImageStorage, settings: Settings):
    async def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_image_storage] = lambda: storage
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://testserver",
        ) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
