"""Use cases of the background delivery context."""

from .context import build_dispatch_router
from .rendering import (
    DEFAULT_TAG,
    FALLBACK_BODY,
    FALLBACK_TITLE,
    default_actions,
    parse_payload,
    render_fallback,
    render_notification,
)
from .router import CLOSE_ACTION, DispatchRouter
from .routing import ROUTES, resolve_target_path, resolve_target_url

__all__ = [
    "CLOSE_ACTION",
    "DEFAULT_TAG",
    "DispatchRouter",
    "FALLBACK_BODY",
    "FALLBACK_TITLE",
    "ROUTES",
    "build_dispatch_router",
    "default_actions",
    "parse_payload",
    "render_fallback",
    "render_notification",
    "resolve_target_path",
    "resolve_target_url",
]
