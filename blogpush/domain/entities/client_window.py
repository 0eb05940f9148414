"""UI instance visible to the background delivery context."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ClientWindow:
    """Open window/tab controlled by the application."""

    id: str
    url: str
    focused: bool = False


__all__ = ["ClientWindow"]
