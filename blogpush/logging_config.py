"""Logging configuration for the service and its uvicorn loggers."""

from __future__ import annotations

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO, format_string: str | None = None) -> None:
    logging.basicConfig(
        level=level,
        format=format_string or DEFAULT_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "blogpush"):
        logging.getLogger(name).setLevel(level)


__all__ = ["configure_logging"]
