"""
app/services package marker.
"""

from app.services.donor_import_service import (
    DonorImportService,
    ImportHeaderError,
    ImportPersistenceError,
    get_donor_import_service,
)
from app.services.donor_service import DonorProfile, DonorService
from app.services.segmentation_service import InvalidSegmentError, SegmentationService
from app.services.volunteer_service import VolunteerProfile, VolunteerService

__all__ = [
    "DonorImportService",
    "DonorProfile",
    "DonorService",
    "ImportHeaderError",
    "ImportPersistenceError",
    "InvalidSegmentError",
    "SegmentationService",
    "VolunteerProfile",
    "VolunteerService",
    "get_donor_import_service",
]
