"""
app/schemas/segmentation.py

Request/response schemas for donor segmentation.
"""

from __future__ import annotations

from pydantic import Field

from app.schemas.common import CamelModel
from app.domain.segmentation import DateRange, DonationFrequency


class SegmentRequest(CamelModel):
    name: str | None = Field(default=None, max_length=200)
    donation_min: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    donation_max: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    donation_frequency: DonationFrequency = DonationFrequency.ALL
    date_range: DateRange = DateRange.ALL
    include_no_email: bool = False


class SegmentResponse(CamelModel):
    id: str
    name: str
    criteria: list[str] = Field(default_factory=list)
    donor_count: int = Field(..., ge=0)
