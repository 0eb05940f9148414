"""Repository implementations for infrastructure layer."""

from .local_storage_repository import LocalStorageRepository

__all__ = ["LocalStorageRepository"]
