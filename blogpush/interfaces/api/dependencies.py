"""FastAPI dependency utilities."""

from fastapi import Request

from blogpush.application.use_cases.delivery import DispatchRouter
from blogpush.application.use_cases.preferences import PreferenceStore
from blogpush.application.use_cases.push import PushContext
from blogpush.infrastructure.notifications import StateConnectionManager


def get_push_context(request: Request) -> PushContext:
    """Return the main-context services created at startup."""

    return request.app.state.push_context


def get_dispatch_router(request: Request) -> DispatchRouter:
    """Return the background delivery context router."""

    return request.app.state.dispatch_router


def get_preference_store(request: Request) -> PreferenceStore:
    return request.app.state.preference_store


def get_connection_manager(request: Request) -> StateConnectionManager:
    return request.app.state.connection_manager
