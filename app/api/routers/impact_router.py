"""
app/api/routers/impact_router.py

Impact calculator and donation logging endpoints.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.repositories.errors import StoreError
from app.schemas.impact import (
    AlmanacEnvelope,
    AlmanacResponse,
    CalculateImpactRequest,
    DonationEnvelope,
    DonationImpactResponse,
    DonationResponse,
    ImpactEnvelope,
    LogDonationRequest,
)
from app.services.donor_service import DonorService
from app.validators.import_row_validator import is_valid_email
from db.session import get_db
from impact.almanac import DEFAULT_ALMANAC
from impact.calculator import InvalidImpactInputError, calculate_donation_impact
from impact.storyteller import narrate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["impact"])


@router.post("/calculate-impact", response_model=ImpactEnvelope)
def calculate_impact(body: CalculateImpactRequest) -> ImpactEnvelope:
    """
    Convert a donation amount into storyteller-enriched impact statistics.
    """

    try:
        impact = narrate(calculate_donation_impact(body.amount))
    except InvalidImpactInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return ImpactEnvelope(impact=DonationImpactResponse.model_validate(impact))


@router.post("/log-donation", response_model=DonationEnvelope, status_code=status.HTTP_201_CREATED)
def log_donation(
    body: LogDonationRequest,
    db: Session = Depends(get_db),
) -> DonationEnvelope:
    email = (body.email or "").strip()
    if email and not is_valid_email(email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid email address.")

    try:
        donation = DonorService(db).log_donation(
            amount=Decimal(str(body.amount)),
            email=email,
            timestamp=body.timestamp,
        )
    except StoreError as exc:
        db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return DonationEnvelope(donation=DonationResponse.model_validate(donation))


@router.get("/almanac-data", response_model=AlmanacEnvelope)
def almanac_data() -> AlmanacEnvelope:
    return AlmanacEnvelope(data=AlmanacResponse.model_validate(DEFAULT_ALMANAC.to_dict()))
