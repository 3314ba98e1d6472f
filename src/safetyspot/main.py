"""FastAPI application entrypoint for Safety Spot."""

import logging

from fastapi import FastAPI

from .api.error_handlers import setup_error_handlers
from .api.v1.router import api_router
from .core.config import get_settings
from .core.database import get_engine, init_db
from .core.logging import configure_logging
from .jobs import register_scheduler

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(title="Safety Spot API", version="0.1.0")
    app.include_router(api_router, prefix="/api/v1")
    setup_error_handlers(app)

    if settings.auto_create_tables:

        @app.on_event("startup")
        def create_tables() -> None:
            init_db(get_engine())
            logger.info("database tables ensured")

    register_scheduler(app, settings)
    return app


app = create_app()
