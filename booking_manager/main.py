"""Booking Manager Web Application.

Serve with ``booking-manager`` (installed entry point) or
``uvicorn booking_manager.main:app``.
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from booking_manager.core.config import settings
from booking_manager.core.database import engine, get_session, init_db
from booking_manager.core.migrations import get_current_version
from booking_manager.routes import bookings, event_types

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Send application logs to ``<log_dir>/latest.log``."""
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        filename=str(settings.log_dir / "latest.log"),
    )


def cors_origins() -> list[str]:
    if settings.allowed_origins == "*":
        return ["*"]
    return [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Bring the schema up to date before serving; release connections after."""
    configure_logging()
    logger.info(f"Starting {settings.app_name}")
    init_db()
    yield
    engine.dispose()
    logger.info(f"{settings.app_name} shut down")


app = FastAPI(
    title=settings.app_name,
    description="Event types, hosts and bookings with attendee identity reconciliation",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(event_types.router)
app.include_router(bookings.router)


@app.get("/health")
async def health(session: Session = Depends(get_session)):
    """Health check with the applied schema migration version."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "schema_version": get_current_version(session.get_bind()),
    }


def run() -> None:
    """Entry point for the ``booking-manager`` command."""
    uvicorn.run(app, host=settings.host, port=settings.port)
