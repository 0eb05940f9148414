"""Observable push state and realtime fan-out helpers."""

from .manager import StateConnectionManager
from .observable import ObservableState, Observer
from .publisher import StateChangePublisher, serialize_subscription

__all__ = [
    "ObservableState",
    "Observer",
    "StateChangePublisher",
    "StateConnectionManager",
    "serialize_subscription",
]
