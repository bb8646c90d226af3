from __future__ import annotations

import logging

from fastapi import FastAPI

from taskie.api.v1.router import api_router
from taskie.core.config import get_settings
from taskie.db.initializer import create_database_schema


logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Construct the FastAPI application and configure routes."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Taskie Scheduler", version="0.1.0")
    app.include_router(api_router, prefix="/api/v1")

    @app.on_event("startup")
    def on_startup() -> None:
        logger.info("Initializing database schema")
        create_database_schema()

    return app


app = create_app()
