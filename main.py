from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from blogpush.application.use_cases.delivery import build_dispatch_router
from blogpush.application.use_cases.preferences import PreferenceStore
from blogpush.application.use_cases.push import PushContext, SubscriptionRegistry
from blogpush.config import Settings, get_settings
from blogpush.infrastructure.database import SessionLocal, engine, initialize_database
from blogpush.infrastructure.http import JsonHttpClient
from blogpush.infrastructure.notifications import StateChangePublisher, StateConnectionManager
from blogpush.infrastructure.platform import InMemoryPushPlatform, build_platform
from blogpush.infrastructure.registry import RegistryClient
from blogpush.interfaces.api.routes import register_routes
from blogpush.logging_config import configure_logging


def create_app(
    settings: Settings | None = None,
    *,
    platform: InMemoryPushPlatform | None = None,
    registry: SubscriptionRegistry | None = None,
    http: JsonHttpClient | None = None,
    session_factory: Callable[[], Session] | None = None,
) -> FastAPI:
    """Build the FastAPI application hosting both execution contexts."""

    settings = settings or get_settings()
    session_factory = session_factory or SessionLocal

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Recover push state at startup and release resources on shutdown."""

        configure_logging(settings.log_level)
        if session_factory is SessionLocal:
            initialize_database()

        push_platform = platform or build_platform(settings)
        http_client = http or JsonHttpClient(
            settings.api_base_url,
            token_provider=lambda: settings.registry_token,
            timeout=settings.http_timeout_seconds,
        )

        connection_manager = StateConnectionManager()
        push_context = PushContext(settings, push_platform, registry or RegistryClient(http_client))
        push_context.attach(StateChangePublisher(connection_manager))
        await push_context.start()

        app.state.connection_manager = connection_manager
        app.state.push_context = push_context
        # The delivery context gets its own HTTP client and no handle on push_context.
        dispatch_router = build_dispatch_router(settings, push_platform, session_factory, http=http)
        app.state.dispatch_router = dispatch_router
        app.state.preference_store = PreferenceStore(session_factory)
        yield
        await push_context.subscriptions.wait_for_background_tasks()
        await dispatch_router.wait_for_background_tasks()
        http_client.close()
        engine.dispose()

    app = FastAPI(title="blogpush", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.site_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)
    return app


app = create_app()
