"""Tests for the observer list behind the reactive push state."""

from __future__ import annotations

import asyncio

import pytest

from blogpush.domain.entities import Subscription, SubscriptionKeys
from blogpush.infrastructure.notifications import (
    ObservableState,
    StateChangePublisher,
    StateConnectionManager,
)


def test_observers_receive_changes_in_order():
    state = ObservableState(0)
    first: list[int] = []
    second: list[int] = []
    state.subscribe(first.append)
    state.subscribe(second.append, replay=False)

    state.set(1)
    state.set(1)
    state.set(2)

    assert first == [0, 1, 2]
    assert second == [1, 2]


def test_reentrant_updates_are_delivered_after_current_one():
    state = ObservableState("idle")
    log: list[tuple[str, str]] = []

    def chaining(value: str) -> None:
        log.append(("chaining", value))
        if value == "a":
            state.set("b")

    state.subscribe(chaining, replay=False)
    state.subscribe(lambda value: log.append(("late", value)), replay=False)

    state.set("a")

    assert log == [("chaining", "a"), ("late", "a"), ("chaining", "b"), ("late", "b")]
    assert state.value == "b"


def test_failing_observer_does_not_block_others(caplog):
    state = ObservableState(0, name="counter")
    received: list[int] = []

    def broken(value: int) -> None:
        raise RuntimeError("boom")

    state.subscribe(broken, replay=False)
    state.subscribe(received.append, replay=False)

    with caplog.at_level("ERROR"):
        state.set(5)

    assert received == [5]
    assert "counter" in caplog.text


def test_unsubscribe_stops_delivery():
    state = ObservableState(0)
    received: list[int] = []
    remove = state.subscribe(received.append, replay=False)

    state.set(1)
    remove()
    state.set(2)

    assert received == [1]


class RecordingWebSocket:
    def __init__(self, *, broken: bool = False) -> None:
        self.broken = broken
        self.accepted = False
        self.messages: list[dict] = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message: dict) -> None:
        if self.broken:
            raise RuntimeError("socket closed")
        self.messages.append(message)


@pytest.mark.anyio
async def test_publisher_broadcasts_subscription_changes():
    manager = StateConnectionManager()
    healthy = RecordingWebSocket()
    broken = RecordingWebSocket(broken=True)
    await manager.connect(healthy)
    await manager.connect(broken)
    publisher = StateChangePublisher(manager)
    subscription = Subscription(endpoint="https://push/1", keys=SubscriptionKeys("p", "a"))

    publisher.publish_subscription(subscription)
    publisher.publish_subscription(None)
    await asyncio.sleep(0)
    await asyncio.sleep(0)

    assert healthy.accepted is True
    assert healthy.messages == [
        {
            "type": "subscription",
            "data": {
                "endpoint": "https://push/1",
                "keys": {"p256dh": "p", "auth": "a"},
                "expiration_time": None,
            },
        },
        {"type": "subscription", "data": None},
    ]
    assert manager.connection_count == 1
