"""Shared fixtures: settings, in-memory platform, registry double and local storage."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from blogpush.application.use_cases.push import PushContext
from blogpush.config import Settings
from blogpush.domain.entities import Permission, Subscription
from blogpush.domain.errors import RegistrySyncFailed
from blogpush.infrastructure.database import initialize_database
from blogpush.infrastructure.platform import InMemoryPushPlatform

SITE_ORIGIN = "https://blog.example"


class RecordingRegistry:
    """Registry double that records every mirror update."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.registered: list[Subscription] = []
        self.deregistered: list[str] = []

    async def register(self, subscription: Subscription) -> None:
        self.registered.append(subscription)
        if self.fail:
            raise RegistrySyncFailed("registry unavailable", status_code=503)

    async def deregister(self, endpoint: str) -> None:
        self.deregistered.append(endpoint)
        if self.fail:
            raise RegistrySyncFailed("registry unavailable", status_code=503)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        api_base_url="https://api.example/api",
        site_origin=SITE_ORIGIN,
        registry_token="token-123",
    )


@pytest.fixture
def platform() -> InMemoryPushPlatform:
    return InMemoryPushPlatform(origin=SITE_ORIGIN, prompt=Permission.GRANTED)


@pytest.fixture
def registry() -> RecordingRegistry:
    return RecordingRegistry()


@pytest.fixture
def context(settings, platform, registry) -> PushContext:
    return PushContext(settings, platform, registry)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    initialize_database(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()
