"""FastAPI application entry point for the venue waitlist manager."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.deps import get_venue
from .api.routes import staff, tables, waitlist, websocket
from .config import settings
from .services.venue import initialize_sample_data

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan handler for startup/shutdown."""
    configure_logging(settings.log_level)
    logger.info("Starting %s...", settings.app_name)

    if settings.seed_demo_data:
        initialize_sample_data(
            get_venue(),
            table_count=settings.default_table_count,
            columns=settings.grid_columns,
        )

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.app_name,
    description="Waitlist and reservation seating for venues",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(tables.router, prefix=settings.api_prefix)
app.include_router(waitlist.router, prefix=settings.api_prefix)
app.include_router(staff.router, prefix=settings.api_prefix)
app.include_router(websocket.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": __version__,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "waitlist_manager.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
