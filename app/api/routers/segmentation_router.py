"""
app/api/routers/segmentation_router.py

Donor segmentation endpoint.
"""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.domain.segmentation import SegmentCriteria
from app.schemas.segmentation import SegmentRequest, SegmentResponse
from app.services.segmentation_service import InvalidSegmentError, SegmentationService
from db.session import get_db

router = APIRouter(prefix="/api", tags=["segmentation"])


def _decimal(value: float | None) -> Decimal | None:
    return Decimal(str(value)) if value is not None else None


@router.post("/segmentation", response_model=SegmentResponse)
def create_segment(body: SegmentRequest, db: Session = Depends(get_db)) -> SegmentResponse:
    criteria = SegmentCriteria(
        name=(body.name or "").strip() or None,
        donation_min=_decimal(body.donation_min),
        donation_max=_decimal(body.donation_max),
        donation_frequency=body.donation_frequency,
        date_range=body.date_range,
        include_no_email=body.include_no_email,
    )
    try:
        result = SegmentationService().create_segment(criteria, db)
    except InvalidSegmentError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return SegmentResponse.model_validate(result)
