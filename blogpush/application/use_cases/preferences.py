"""Local notification category preferences."""

from __future__ import annotations

import json
import logging
from typing import Callable

from sqlalchemy.orm import Session

from blogpush.domain.entities import PreferenceRecord
from blogpush.infrastructure.repositories import LocalStorageRepository

logger = logging.getLogger(__name__)

PREFERENCES_KEY = "pushNotificationSettings"


class PreferenceStore:
    """Read and write the :class:`PreferenceRecord` kept in local storage."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def load(self) -> PreferenceRecord:
        """Return the persisted record, or the all-enabled default."""

        session = self._session_factory()
        try:
            raw = LocalStorageRepository(session).get(PREFERENCES_KEY)
        finally:
            session.close()

        if raw is None:
            return PreferenceRecord()
        try:
            values = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored notification settings are unreadable; using defaults")
            return PreferenceRecord()
        if not isinstance(values, dict):
            logger.warning("Stored notification settings are not an object; using defaults")
            return PreferenceRecord()
        return PreferenceRecord.from_mapping(values)

    def save(self, record: PreferenceRecord) -> PreferenceRecord:
        session = self._session_factory()
        try:
            LocalStorageRepository(session).set(PREFERENCES_KEY, json.dumps(record.to_dict()))
        finally:
            session.close()
        return record

    def toggle(self, category: str, enabled: bool | None = None) -> PreferenceRecord:
        """Flip ``category`` (or set it to ``enabled``) leaving the others untouched."""

        record = self.load()
        value = (not record.is_enabled(category)) if enabled is None else enabled
        return self.save(record.with_category(category, value))

    def update(self, **changes: bool) -> PreferenceRecord:
        record = self.load()
        for category, enabled in changes.items():
            record = record.with_category(category, enabled)
        return self.save(record)


__all__ = ["PREFERENCES_KEY", "PreferenceStore"]
