"""
Application lifecycle management using the FastAPI lifespan pattern.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy import text

from commerce_hub.core.container import ServiceContainer

logger = logging.getLogger(__name__)


class LifecycleManager:
    """
    Startup checks and graceful shutdown for one container.
    """

    def __init__(self, container: ServiceContainer) -> None:
        self._container = container
        self._initialized = False

    async def startup(self) -> None:
        if self._initialized:
            logger.warning("Lifecycle already initialized, skipping startup")
            return

        logger.info("Starting application lifecycle...")
        self._verify_configurations()
        await self._verify_database()

        self._initialized = True
        logger.info("Application lifecycle startup completed")

    async def shutdown(self) -> None:
        if not self._initialized:
            logger.warning("Lifecycle not initialized, skipping shutdown")
            return

        logger.info("Stopping application lifecycle...")
        await self._container.aclose()

        self._initialized = False
        logger.info("Application lifecycle shutdown completed")

    def _verify_configurations(self) -> None:
        settings = self._container.settings
        if not settings.LLM_API_KEY:
            logger.warning("LLM_API_KEY not configured - assistant replies will use the fallback message")
        if not settings.SENTRY_DSN:
            logger.info("SENTRY_DSN not configured - error tracking disabled")

    async def _verify_database(self) -> None:
        """Check connectivity; a failure is logged, not fatal."""
        try:
            async with self._container.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database connectivity verified")
        except Exception as e:
            logger.error(f"Database connectivity check failed: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Usage:
        app = FastAPI(lifespan=lifespan)
    """
    lifecycle = LifecycleManager(app.state.container)

    await lifecycle.startup()

    yield

    await lifecycle.shutdown()
