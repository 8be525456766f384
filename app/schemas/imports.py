"""
app/schemas/imports.py

Response schema for spreadsheet imports.
"""

from __future__ import annotations

from pydantic import Field

from app.schemas.common import CamelModel


class ImportSummaryResponse(CamelModel):
    """
    API response model for one import run.
    """

    total: int = Field(..., ge=0)
    successful: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    errors: list[str] = Field(default_factory=list)
    skipped: int = Field(default=0, ge=0)
    donors_created: int = Field(default=0, ge=0)
    donors_updated: int = Field(default=0, ge=0)
    donations_created: int = Field(default=0, ge=0)
