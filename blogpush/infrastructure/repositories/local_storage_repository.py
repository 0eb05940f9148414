"""Persistence helpers for local key/value storage."""

from __future__ import annotations

from sqlalchemy.orm import Session

from blogpush.infrastructure.models import LocalSettingModel


class LocalStorageRepository:
    """Provide get/set/remove operations over :class:`LocalSettingModel` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, key: str) -> str | None:
        model = self.session.get(LocalSettingModel, key)
        return None if model is None else model.value

    def set(self, key: str, value: str) -> None:
        model = self.session.get(LocalSettingModel, key)
        if model is None:
            model = LocalSettingModel(key=key, value=value)
        else:
            model.value = value
        self.session.add(model)
        self.session.commit()

    def remove(self, key: str) -> None:
        model = self.session.get(LocalSettingModel, key)
        if model is None:
            return
        self.session.delete(model)
        self.session.commit()


__all__ = ["LocalStorageRepository"]
