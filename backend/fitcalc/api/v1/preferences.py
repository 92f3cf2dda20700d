"""
Stored preference endpoints.

Lets the client restore last-used inputs and share the unit preference
between calculators.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from fitcalc.db.database import get_db
from fitcalc.services.preference_service import (
    PreferenceService,
    StorageKey,
    resolve_key,
)

router = APIRouter()


class PreferenceValue(BaseModel):
    value: Any = None


class PreferenceResponse(BaseModel):
    key: str
    value: Any = None


class ClearResponse(BaseModel):
    deleted: int


def _resolve_or_404(key: str) -> StorageKey:
    try:
        return resolve_key(key)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown preference key '{key}'",
        )


@router.get("/preferences", response_model=Dict[str, Any], status_code=status.HTTP_200_OK)
async def list_preferences(db: Session = Depends(get_db)):
    """All known keys with their stored values or defaults."""
    return PreferenceService(db).get_all()


@router.get(
    "/preferences/{key}",
    response_model=PreferenceResponse,
    status_code=status.HTTP_200_OK,
)
async def get_preference(key: str, db: Session = Depends(get_db)):
    storage_key = _resolve_or_404(key)
    value = PreferenceService(db).get(storage_key)
    return PreferenceResponse(key=storage_key.value, value=value)


@router.put(
    "/preferences/{key}",
    response_model=PreferenceResponse,
    status_code=status.HTTP_200_OK,
)
async def set_preference(key: str, request: PreferenceValue, db: Session = Depends(get_db)):
    """
    Store a value under a known key.

    The unit preference is standardized, so "cm" is stored as "metric".
    """
    storage_key = _resolve_or_404(key)
    service = PreferenceService(db)

    try:
        if storage_key is StorageKey.UNIT_PREFERENCE:
            value = service.set_unit_system(request.value).value
        else:
            value = service.save(storage_key, request.value)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return PreferenceResponse(key=storage_key.value, value=value)


@router.delete("/preferences", response_model=ClearResponse, status_code=status.HTTP_200_OK)
async def clear_preferences(db: Session = Depends(get_db)):
    """Remove every stored value; reads fall back to defaults afterwards."""
    deleted = PreferenceService(db).clear_all()
    return ClearResponse(deleted=deleted)
