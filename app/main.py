"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api.routes import channels
from app.core.config import settings
from app.core.logging import setup_logging, get_logger
from app.db.connection import db

# Set up logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup/shutdown."""
    # Startup
    logger.info("application_starting", app_name=settings.app_name)

    await db.connect()
    await db.init_schema()

    logger.info("application_started")

    yield

    # Shutdown
    logger.info("application_stopping")
    await db.disconnect()
    logger.info("application_stopped")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="API for ingesting and browsing YouTube channel video catalogs",
    version="0.1.0",
    lifespan=lifespan,
)

# Include routers
app.include_router(channels.router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "message": "Channel Catalog API",
        "docs": "/docs",
    }
