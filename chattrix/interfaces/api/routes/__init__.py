from fastapi import FastAPI

from .auth import router as auth_router
from .health import router as health_router
from .notifications import router as notifications_router
from .relationships import router as relationships_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(notifications_router)
    app.include_router(relationships_router)
