"""Navigation targets of notification clicks, keyed by notification type."""

from __future__ import annotations

from typing import Callable
from urllib.parse import urlsplit

from blogpush.domain.entities import NotificationData

RouteHandler = Callable[[NotificationData], str]

DASHBOARD_PATH = "/dashboard"
ARTICLES_PATH = "/articles"
ROOT_PATH = "/"


def _comment(data: NotificationData) -> str:
    return f"{ARTICLES_PATH}/{data.article_id}#comments" if data.article_id else DASHBOARD_PATH


def _like(data: NotificationData) -> str:
    return f"{ARTICLES_PATH}/{data.article_id}" if data.article_id else DASHBOARD_PATH


def _follow(data: NotificationData) -> str:
    return f"/profile/{data.user_id}" if data.user_id else DASHBOARD_PATH


def _article_published(data: NotificationData) -> str:
    return f"{ARTICLES_PATH}/{data.article_id}" if data.article_id else ARTICLES_PATH


def _system(data: NotificationData) -> str:
    return DASHBOARD_PATH


ROUTES: dict[str, RouteHandler] = {
    "comment": _comment,
    "like": _like,
    "follow": _follow,
    "article_published": _article_published,
    "system": _system,
}


def resolve_target_path(data: NotificationData | None, action: str | None = None) -> str:
    """Return the site path a click on a notification carrying ``data`` opens."""

    if data is None:
        return ROOT_PATH
    if action == "open" and data.url and data.url.startswith("/"):
        return data.url
    handler = ROUTES.get(data.type or "")
    return handler(data) if handler else ROOT_PATH


def resolve_target_url(origin: str, data: NotificationData | None, action: str | None = None) -> str:
    """Absolute URL of :func:`resolve_target_path` under ``origin``."""

    base = origin.rstrip("/")
    if data is not None and action == "open" and data.url and _same_origin(base, data.url):
        return data.url
    return f"{base}{resolve_target_path(data, action)}"


def _same_origin(origin: str, url: str) -> bool:
    target = urlsplit(url)
    if not target.scheme:
        return False
    source = urlsplit(origin)
    return (target.scheme, target.netloc) == (source.scheme, source.netloc)


__all__ = ["ROUTES", "RouteHandler", "resolve_target_path", "resolve_target_url"]
