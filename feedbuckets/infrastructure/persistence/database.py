from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from feedbuckets.infrastructure.config.settings import get_settings

settings = get_settings()


def _engine_options(database_url: str) -> dict[str, Any]:
    """Connection pool options; SQLite drivers reject pool sizing arguments"""
    if database_url.startswith("sqlite"):
        return {}
    return {
        "pool_pre_ping": True,
        "pool_size": 20,
        "max_overflow": 30,
        "pool_recycle": 3600,
        "connect_args": (
            {
                "server_settings": {"jit": "off"},
                "command_timeout": 60,
            }
            if "postgresql" in database_url
            else {}
        ),
    }


# Create engine once at module level (not with lru_cache)
engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    **_engine_options(settings.database_url),
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


class Base(DeclarativeBase):
    """Base class for all database models"""

    pass


async def get_db():
    """
    Database session dependency for read operations.
    Does not commit - the bucketed view never writes.
    Write operations should use get_db_transactional().
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def get_db_transactional():
    """
    Database session dependency for write operations with automatic transaction management.
    - Begins transaction automatically
    - Commits on success
    - Rolls back on exception
    - Closes session automatically

    Use this for the mark-as-read endpoints.
    """
    async with AsyncSessionLocal() as session:
        try:
            async with session.begin():
                yield session
        except Exception:
            await session.rollback()
            raise
