from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from user_api.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    options: dict[str, int] = {}
    # SQLite uses a pool class that rejects sizing arguments.
    if not settings.database_url.startswith("sqlite"):
        options = {
            "pool_size": settings.db_pool_size,
            "max_overflow": settings.db_max_overflow,
        }
    return create_async_engine(settings.database_url, echo=False, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
