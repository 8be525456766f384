"""
app/services/volunteer_service.py

Volunteer lookups and shift logging for the API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from app.domain.donor_records import ShiftInput
from app.repositories.donor_repository import normalize_email
from app.repositories.volunteer_repository import VolunteerRepository
from db.models.volunteer import Volunteer
from db.models.volunteer_shift import VolunteerShift
from impact.calculator import VolunteerImpact, calculate_volunteer_impact

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VolunteerProfile:
    email: str
    volunteer: Volunteer | None
    shifts: list[VolunteerShift]
    impact: VolunteerImpact | None

    @property
    def latest_shift(self) -> VolunteerShift | None:
        return self.shifts[0] if self.shifts else None

    @property
    def total_hours(self) -> Decimal:
        return sum((shift.hours for shift in self.shifts), Decimal("0"))


class VolunteerService:
    def __init__(self, session: Session) -> None:
        self._session = session
        self._repository = VolunteerRepository(session)

    def get_profile(self, identifier: str) -> VolunteerProfile | None:
        """
        Resolve a volunteer by id or email with their shifts, most recent first.

        Impact is computed from the latest shift's hours. Orphaned shifts
        logged under the email are included.
        """

        volunteer = self._repository.get_by_identifier(identifier)
        if volunteer is not None:
            email = volunteer.email
            shifts = self._repository.list_shifts(volunteer.id)
            known = {shift.id for shift in shifts}
            shifts.extend(
                shift for shift in self._repository.list_shifts_by_email(email) if shift.id not in known
            )
            shifts.sort(key=lambda shift: (shift.shift_date.replace(tzinfo=None), shift.id), reverse=True)
        else:
            email = normalize_email(identifier)
            shifts = self._repository.list_shifts_by_email(email) if "@" in email else []
            if not shifts:
                return None

        latest = shifts[0] if shifts else None
        impact = calculate_volunteer_impact(latest.hours) if latest is not None else None
        return VolunteerProfile(email=email, volunteer=volunteer, shifts=shifts, impact=impact)

    def log_shift(
        self,
        *,
        email: str,
        hours: Decimal,
        shift_date: datetime | None = None,
    ) -> tuple[VolunteerShift, VolunteerImpact]:
        shift = self._repository.create_shift(ShiftInput(hours=hours, shift_date=shift_date, email=email))
        self._session.commit()
        logger.info(
            "Volunteer shift logged id=%s hours=%s volunteer_id=%s",
            shift.id,
            shift.hours,
            shift.volunteer_id,
        )
        return shift, calculate_volunteer_impact(shift.hours)
