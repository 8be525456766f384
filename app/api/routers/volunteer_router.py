"""
app/api/routers/volunteer_router.py

Volunteer impact, shift logging and lookup endpoints.
"""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.repositories.errors import StoreError
from app.schemas.donor import LogShiftRequest, LogShiftResponse, ShiftResponse, VolunteerProfileResponse, VolunteerResponse
from app.schemas.impact import (
    CalculateVolunteerImpactRequest,
    VolunteerImpactEnvelope,
    VolunteerImpactResponse,
)
from app.services.volunteer_service import VolunteerService
from app.validators.import_row_validator import is_valid_email
from db.session import get_db
from impact.calculator import InvalidImpactInputError, calculate_volunteer_impact

router = APIRouter(prefix="/api", tags=["volunteers"])


def _impact_envelope(hours: float) -> VolunteerImpactEnvelope:
    try:
        impact = calculate_volunteer_impact(hours)
    except InvalidImpactInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return VolunteerImpactEnvelope(impact=VolunteerImpactResponse.model_validate(impact))


@router.get("/calculate-volunteer-impact", response_model=VolunteerImpactEnvelope)
def calculate_volunteer_impact_query(
    hours: float = Query(..., ge=0, allow_inf_nan=False, description="Volunteer hours"),
) -> VolunteerImpactEnvelope:
    return _impact_envelope(hours)


@router.post("/calculate-volunteer-impact", response_model=VolunteerImpactEnvelope)
def calculate_volunteer_impact_body(body: CalculateVolunteerImpactRequest) -> VolunteerImpactEnvelope:
    return _impact_envelope(body.hours)


@router.post("/log-volunteer-shift", response_model=LogShiftResponse, status_code=status.HTTP_201_CREATED)
def log_volunteer_shift(body: LogShiftRequest, db: Session = Depends(get_db)) -> LogShiftResponse:
    """
    Record one shift. The volunteer is resolved by email; unknown emails
    are stored as orphaned shifts.
    """

    if not is_valid_email(body.email.strip()):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid email address.")

    try:
        shift, impact = VolunteerService(db).log_shift(
            email=body.email,
            hours=Decimal(str(body.hours)),
            shift_date=body.shift_date,
        )
    except StoreError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return LogShiftResponse(
        shift=ShiftResponse.model_validate(shift),
        impact=VolunteerImpactResponse.model_validate(impact),
    )


@router.get("/volunteer/{identifier}", response_model=VolunteerProfileResponse)
def get_volunteer(identifier: str, db: Session = Depends(get_db)) -> VolunteerProfileResponse:
    profile = VolunteerService(db).get_profile(identifier)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Volunteer not found")

    latest = profile.latest_shift
    return VolunteerProfileResponse(
        email=profile.email,
        volunteer=VolunteerResponse.model_validate(profile.volunteer) if profile.volunteer is not None else None,
        shift=ShiftResponse.model_validate(latest) if latest is not None else None,
        shifts=[ShiftResponse.model_validate(shift) for shift in profile.shifts],
        impact=VolunteerImpactResponse.model_validate(profile.impact) if profile.impact is not None else None,
        total_hours=float(profile.total_hours),
    )
