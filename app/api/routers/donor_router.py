"""
app/api/routers/donor_router.py

Donor lookup endpoint backing the returning-donor slides.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.schemas.donor import DonorProfileResponse, DonorResponse, GivingSummaryResponse
from app.schemas.impact import DonationImpactResponse, DonationResponse
from app.services.donor_service import DonorService
from db.session import get_db

router = APIRouter(prefix="/api", tags=["donors"])


@router.get("/donor/{identifier}", response_model=DonorProfileResponse)
def get_donor(identifier: str, db: Session = Depends(get_db)) -> DonorProfileResponse:
    """
    Look up a donor by numeric id or email.

    Returns the latest donation, the full history (most recent first), the
    impact of the amount chosen for the donor's slides and their giving
    summary. Raises HTTP 404 when nothing matches.
    """

    profile = DonorService(db).get_profile(identifier)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Donor not found")

    latest = profile.latest_donation
    giving = GivingSummaryResponse.model_validate(profile.giving).model_copy(
        update={"impact_amount": float(profile.impact_amount)}
    )
    return DonorProfileResponse(
        email=profile.email,
        donor=DonorResponse.model_validate(profile.donor) if profile.donor is not None else None,
        donation=DonationResponse.model_validate(latest) if latest is not None else None,
        donations=[DonationResponse.model_validate(donation) for donation in profile.donations],
        impact=DonationImpactResponse.model_validate(profile.impact),
        giving_summary=giving,
    )
