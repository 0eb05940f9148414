"""Publish-on-change state holder with ordered, synchronous delivery."""

from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Observer = Callable[[T], None]


class ObservableState(Generic[T]):
    """Hold a value and publish every change to the registered observers.

    Observers are called synchronously in registration order. A change made by an
    observer while a delivery is running is queued and published only after the
    current delivery has reached every observer, so no observer ever sees
    interleaved partial updates.
    """

    def __init__(self, initial: T, *, name: str = "state") -> None:
        self._value = initial
        self._name = name
        self._observers: list[Observer[T]] = []
        self._pending: Deque[T] = deque()
        self._delivering = False

    @property
    def value(self) -> T:
        return self._value

    def subscribe(self, observer: Observer[T], *, replay: bool = True) -> Callable[[], None]:
        """Register ``observer`` and return a callable that removes it.

        With ``replay`` the observer immediately receives the current value.
        """

        self._observers.append(observer)
        if replay:
            self._notify(observer, self._value)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def set(self, value: T) -> None:
        """Store ``value`` and publish it when it differs from the current one."""

        if value == self._value and not self._pending:
            return
        self._pending.append(value)
        if self._delivering:
            return

        self._delivering = True
        try:
            while self._pending:
                next_value = self._pending.popleft()
                if next_value == self._value:
                    continue
                self._value = next_value
                for observer in list(self._observers):
                    self._notify(observer, next_value)
        finally:
            self._delivering = False

    def _notify(self, observer: Observer[T], value: T) -> None:
        try:
            observer(value)
        except Exception:
            logger.exception("Observer of %s failed while handling an update", self._name)


__all__ = ["ObservableState", "Observer"]
