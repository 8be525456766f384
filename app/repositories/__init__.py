"""
app/repositories package marker.
"""

from app.repositories.donor_repository import DonorRepository, normalize_email
from app.repositories.errors import (
    DonorNotFoundError,
    InvalidRecordError,
    StoreError,
    VolunteerNotFoundError,
)
from app.repositories.volunteer_repository import VolunteerRepository

__all__ = [
    "DonorNotFoundError",
    "DonorRepository",
    "InvalidRecordError",
    "StoreError",
    "VolunteerNotFoundError",
    "VolunteerRepository",
    "normalize_email",
]
