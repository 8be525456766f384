"""
app/schemas package marker.
"""

from app.schemas.donor import (
    DonorProfileResponse,
    GivingSummaryResponse,
    LogShiftRequest,
    LogShiftResponse,
    VolunteerProfileResponse,
)
from app.schemas.impact import (
    AlmanacEnvelope,
    CalculateImpactRequest,
    CalculateVolunteerImpactRequest,
    DonationEnvelope,
    DonationImpactResponse,
    ImpactEnvelope,
    LogDonationRequest,
    VolunteerImpactEnvelope,
    VolunteerImpactResponse,
)
from app.schemas.imports import ImportSummaryResponse
from app.schemas.segmentation import SegmentRequest, SegmentResponse

__all__ = [
    "AlmanacEnvelope",
    "CalculateImpactRequest",
    "CalculateVolunteerImpactRequest",
    "DonationEnvelope",
    "DonationImpactResponse",
    "DonorProfileResponse",
    "GivingSummaryResponse",
    "ImpactEnvelope",
    "ImportSummaryResponse",
    "LogDonationRequest",
    "LogShiftRequest",
    "LogShiftResponse",
    "SegmentRequest",
    "SegmentResponse",
    "VolunteerImpactEnvelope",
    "VolunteerImpactResponse",
    "VolunteerProfileResponse",
]
