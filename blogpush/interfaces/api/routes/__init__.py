from fastapi import FastAPI

from .preferences import router as preferences_router
from .push import router as push_router
from .worker import router as worker_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(preferences_router)
    app.include_router(push_router)
    app.include_router(worker_router)
