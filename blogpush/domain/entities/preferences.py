"""Local record of which notification categories the user wants surfaced."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping

PREFERENCE_CATEGORIES: tuple[str, ...] = ("comments", "likes", "mentions", "articles", "system")


@dataclass(frozen=True)
class PreferenceRecord:
    """Enabled flag per notification category; everything enabled by default."""

    comments: bool = True
    likes: bool = True
    mentions: bool = True
    articles: bool = True
    system: bool = True

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "PreferenceRecord":
        """Build a record, ignoring unknown keys and defaulting missing ones."""

        known = {
            category: bool(values[category])
            for category in PREFERENCE_CATEGORIES
            if category in values and isinstance(values[category], bool)
        }
        return cls(**known)

    def with_category(self, category: str, enabled: bool) -> "PreferenceRecord":
        if category not in PREFERENCE_CATEGORIES:
            raise ValueError(f"Unknown notification category '{category}'")
        return replace(self, **{category: enabled})

    def is_enabled(self, category: str) -> bool:
        if category not in PREFERENCE_CATEGORIES:
            raise ValueError(f"Unknown notification category '{category}'")
        return getattr(self, category)

    def to_dict(self) -> dict[str, bool]:
        return asdict(self)


__all__ = ["PREFERENCE_CATEGORIES", "PreferenceRecord"]
