"""
app/schemas/donor.py

Response schemas for donor and volunteer lookups.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.impact import DonationImpactResponse, DonationResponse, VolunteerImpactResponse


class DonorResponse(CamelModel):
    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    external_id: str | None = None
    created_at: datetime | None = None
    last_imported: datetime | None = None


class GivingSummaryResponse(CamelModel):
    lifetime_giving: float = 0.0
    total_gifts: int = 0
    first_gift_date: datetime | None = None
    last_gift_date: datetime | None = None
    last_gift_amount: float | None = None
    largest_gift_amount: float | None = None
    largest_gift_date: datetime | None = None
    consecutive_years_giving: int = 0
    giving_by_fiscal_year: dict[str, float] = Field(default_factory=dict)
    impact_amount: float | None = None


class DonorProfileResponse(CamelModel):
    email: str
    donor: DonorResponse | None = None
    donation: DonationResponse | None = None
    donations: list[DonationResponse] = Field(default_factory=list)
    impact: DonationImpactResponse
    giving_summary: GivingSummaryResponse


class VolunteerResponse(CamelModel):
    id: int
    email: str
    name: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ShiftResponse(CamelModel):
    id: int
    hours: float
    shift_date: datetime
    email: str
    volunteer_id: int | None = None
    external_shift_id: str | None = None


class LogShiftRequest(CamelModel):
    email: str = Field(..., min_length=3, max_length=320)
    hours: float = Field(..., ge=0, allow_inf_nan=False)
    shift_date: datetime | None = None


class LogShiftResponse(CamelModel):
    shift: ShiftResponse
    impact: VolunteerImpactResponse


class VolunteerProfileResponse(CamelModel):
    email: str
    volunteer: VolunteerResponse | None = None
    shift: ShiftResponse | None = None
    shifts: list[ShiftResponse] = Field(default_factory=list)
    impact: VolunteerImpactResponse | None = None
    total_hours: float = 0.0
