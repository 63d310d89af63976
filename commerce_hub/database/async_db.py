import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from commerce_hub.config.settings import Settings

logger = logging.getLogger(__name__)


def create_async_database_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine from settings (NullPool in debug, pooled otherwise)"""
    database_url = settings.async_database_url

    base_config = {
        "echo": settings.DB_ECHO,
        "pool_pre_ping": True,
    }

    if database_url.startswith("sqlite"):
        logger.info("Creating async database engine for SQLite")
        return create_async_engine(database_url, echo=settings.DB_ECHO)

    if settings.DEBUG:
        logger.info("Creating async database engine for DEVELOPMENT (NullPool)")
        engine_config = {**base_config, "poolclass": NullPool}
    else:
        logger.info("Creating async database engine for PRODUCTION (pooled)")
        engine_config = {
            **base_config,
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_recycle": settings.DB_POOL_RECYCLE,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
        }

    try:
        return create_async_engine(database_url, **engine_config)
    except Exception as e:
        logger.error(f"Failed to create async database engine: {e}")
        raise


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def session_scope(factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    """
    Session context manager.

    Repositories commit explicitly; closing the session discards anything
    left uncommitted.
    """
    async with factory() as session:
        try:
            yield session
        except SQLAlchemyError as e:
            logger.error(f"Async database error: {e}")
            await session.rollback()
            raise
