"""Pydantic models for notification category preferences."""

from __future__ import annotations

from pydantic import BaseModel


class PreferenceRecordSchema(BaseModel):
    """Enabled flag per notification category."""

    comments: bool = True
    likes: bool = True
    mentions: bool = True
    articles: bool = True
    system: bool = True


class PreferenceUpdateRequest(BaseModel):
    """Partial update; omitted categories keep their stored value."""

    comments: bool | None = None
    likes: bool | None = None
    mentions: bool | None = None
    articles: bool | None = None
    system: bool | None = None

    def changes(self) -> dict[str, bool]:
        return {key: value for key, value in self.model_dump().items() if value is not None}


class PreferenceToggleRequest(BaseModel):
    enabled: bool | None = None


__all__ = ["PreferenceRecordSchema", "PreferenceToggleRequest", "PreferenceUpdateRequest"]
