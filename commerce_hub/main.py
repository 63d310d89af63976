"""
Application entry point.

Configuration, middleware and lifecycle management are delegated to
commerce_hub.core.app_factory.
"""

import logging

import sentry_sdk

from commerce_hub.config.settings import get_settings
from commerce_hub.core.app_factory import create_app
from commerce_hub.core.shared.logger import configure_logging

settings = get_settings()

configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT, settings.LOG_FILE)
logger = logging.getLogger(__name__)

if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        send_default_pii=False,
        environment=settings.ENVIRONMENT,
    )

app = create_app(settings)

if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting application in {settings.ENVIRONMENT} mode")
    uvicorn.run(
        "commerce_hub.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
