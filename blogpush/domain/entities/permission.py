"""Notification permission tri-state."""

from __future__ import annotations

from enum import Enum


class Permission(str, Enum):
    """Permission decision as reported by the platform."""

    UNDETERMINED = "undetermined"
    GRANTED = "granted"
    DENIED = "denied"

    @classmethod
    def from_platform(cls, value: "str | Permission | None") -> "Permission":
        """Map a platform value (``default``/``granted``/``denied``) to a member."""

        if isinstance(value, Permission):
            return value
        if value == "granted":
            return cls.GRANTED
        if value == "denied":
            return cls.DENIED
        return cls.UNDETERMINED

    @property
    def is_granted(self) -> bool:
        return self is Permission.GRANTED


__all__ = ["Permission"]
