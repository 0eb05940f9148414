"""Utility helpers for reusable functionality."""

from .datetime import get_app_timezone, isoformat_timestamp, now_in_app_timezone
from .encoding import bytes_to_base64, url_base64_to_bytes

__all__ = [
    "bytes_to_base64",
    "get_app_timezone",
    "isoformat_timestamp",
    "now_in_app_timezone",
    "url_base64_to_bytes",
]
