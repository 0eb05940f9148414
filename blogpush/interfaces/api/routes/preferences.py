"""Endpoints for the local notification category preferences."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from blogpush.application.use_cases.preferences import PreferenceStore
from blogpush.domain.entities import PreferenceRecord
from blogpush.interfaces.api.dependencies import get_preference_store
from blogpush.interfaces.api.schemas import (
    PreferenceRecordSchema,
    PreferenceToggleRequest,
    PreferenceUpdateRequest,
)

router = APIRouter(prefix="/push/preferences", tags=["preferences"])


def _record_to_schema(record: PreferenceRecord) -> PreferenceRecordSchema:
    return PreferenceRecordSchema(**record.to_dict())


@router.get("", response_model=PreferenceRecordSchema)
def read_preferences(store: PreferenceStore = Depends(get_preference_store)) -> PreferenceRecordSchema:
    """Return the stored preferences, all enabled when nothing was saved."""

    return _record_to_schema(store.load())


@router.put("", response_model=PreferenceRecordSchema)
def update_preferences(
    payload: PreferenceUpdateRequest,
    store: PreferenceStore = Depends(get_preference_store),
) -> PreferenceRecordSchema:
    return _record_to_schema(store.update(**payload.changes()))


@router.post("/{category}/toggle", response_model=PreferenceRecordSchema)
def toggle_preference(
    category: str,
    payload: PreferenceToggleRequest | None = None,
    store: PreferenceStore = Depends(get_preference_store),
) -> PreferenceRecordSchema:
    """Flip one category, or set it when ``enabled`` is given."""

    enabled = payload.enabled if payload is not None else None
    try:
        record = store.toggle(category, enabled)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return _record_to_schema(record)
