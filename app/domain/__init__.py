"""
app/domain package marker.
"""

from app.domain.donor_records import (
    DonationInput,
    DonorInput,
    ImportRow,
    ImportSummary,
    RowImportError,
    ShiftInput,
    VolunteerInput,
)
from app.domain.segmentation import DateRange, DonationFrequency, SegmentCriteria, SegmentResult

__all__ = [
    "DateRange",
    "DonationFrequency",
    "DonationInput",
    "DonorInput",
    "ImportRow",
    "ImportSummary",
    "RowImportError",
    "SegmentCriteria",
    "SegmentResult",
    "ShiftInput",
    "VolunteerInput",
]
