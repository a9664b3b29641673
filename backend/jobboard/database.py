"""
Async database engine and session management.

The engine (and its connection pool) is created once per process. Each
request gets its own AsyncSession through the get_db dependency; closing
the session rolls back anything left uncommitted.
"""
from typing import AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from jobboard.config import settings


def _engine_options(database_url: str) -> dict:
    """Build engine kwargs so that no store call can block indefinitely."""
    url = make_url(database_url)
    options = {"pool_pre_ping": True}

    if url.get_backend_name() == "sqlite":
        # aiosqlite passes this through as the busy timeout
        options["connect_args"] = {"timeout": settings.db_timeout_seconds}
    else:
        options["pool_timeout"] = settings.db_pool_timeout_seconds
        if url.get_driver_name() == "asyncpg":
            options["connect_args"] = {"command_timeout": settings.db_timeout_seconds}

    return options


engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_options(settings.database_url),
)

AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped session."""
    async with AsyncSessionLocal() as session:
        yield session


async def init_models() -> None:
    """Create all tables (development convenience; production uses Alembic)."""
    # Import models so Base.metadata knows about every table
    import jobboard.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
