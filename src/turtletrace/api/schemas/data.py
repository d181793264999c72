"""Pydantic schemas for backup endpoints."""

from typing import Any

from pydantic import BaseModel


class ImportRequest(BaseModel):
    """A JSON backup document as produced by the export endpoint."""

    model_config = {"extra": "allow"}

    positions: Any = None


class ImportResponse(BaseModel):
    model_config = {"from_attributes": True}

    imported_count: int
    skipped_count: int
    error_count: int
    errors: list[str]
    accounts_restored: bool
