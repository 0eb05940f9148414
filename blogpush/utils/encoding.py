"""Conversions between the key encodings used by the push platform."""

from __future__ import annotations

import base64


def url_base64_to_bytes(value: str) -> bytes:
    """Decode an unpadded base64url string such as a VAPID public key."""

    padding = "=" * ((4 - len(value) % 4) % 4)
    return base64.urlsafe_b64decode(value + padding)


def bytes_to_base64(data: bytes) -> str:
    """Encode key material the way it is sent to the registry."""

    return base64.b64encode(data).decode("ascii")


__all__ = ["bytes_to_base64", "url_base64_to_bytes"]
