"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.donation import Donation
from db.models.donor import Donor
from db.models.volunteer import Volunteer
from db.models.volunteer_shift import VolunteerShift

__all__ = [
    "Donor",
    "Donation",
    "Volunteer",
    "VolunteerShift",
]
