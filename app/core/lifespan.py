"""Application lifespan: startup and shutdown.

Single place for startup/shutdown logic. Used by main.py; no business
logic here, only wiring of logging, workflow services and DB engine dispose.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api.v1.dependencies import build_workflow_services
from app.infrastructure.persistence.database import dispose_engine
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, workflow services on app.state.services.
    Shutdown: SQL engine dispose.
    """
    setup_logging()
    app.state.services = build_workflow_services()
    logger.info("Workflow services ready")

    yield

    app.state.services = None
    await dispose_engine()
    logger.info("Database engine disposed")
