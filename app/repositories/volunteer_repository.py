"""
app/repositories/volunteer_repository.py

Persistence layer for volunteers and their shifts.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.domain.donor_records import ShiftInput, VolunteerInput
from app.repositories.donor_repository import normalize_email
from app.repositories.errors import InvalidRecordError, VolunteerNotFoundError
from db.models.volunteer import Volunteer
from db.models.volunteer_shift import VolunteerShift

_VOLUNTEER_FIELDS = ("name", "phone", "address", "city", "state", "zip_code")


class VolunteerRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, volunteer_id: int) -> Volunteer | None:
        return self._session.get(Volunteer, volunteer_id)

    def get_by_email(self, email: str) -> Volunteer | None:
        normalized = normalize_email(email)
        if not normalized:
            return None
        stmt = select(Volunteer).where(Volunteer.email == normalized)
        return self._session.scalars(stmt).first()

    def get_by_identifier(self, identifier: str) -> Volunteer | None:
        value = identifier.strip()
        if value.isdigit():
            return self.get_by_id(int(value))
        return self.get_by_email(value)

    def create(self, data: VolunteerInput) -> Volunteer:
        email = normalize_email(data.email)
        if not email:
            raise InvalidRecordError("Volunteer email is required.")

        volunteer = Volunteer(email=email)
        self._apply(volunteer, data)
        self._session.add(volunteer)
        self._session.flush()
        return volunteer

    def update(self, volunteer_id: int, data: VolunteerInput) -> Volunteer:
        volunteer = self.get_by_id(volunteer_id)
        if volunteer is None:
            raise VolunteerNotFoundError(f"Volunteer not found: {volunteer_id}")
        self._apply(volunteer, data)
        self._session.flush()
        return volunteer

    def upsert_by_email(self, data: VolunteerInput) -> tuple[Volunteer, bool]:
        existing = self.get_by_email(data.email)
        if existing is None:
            return self.create(data), True
        return self.update(existing.id, data), False

    def create_shift(self, data: ShiftInput) -> VolunteerShift:
        """
        Insert one shift, resolving the volunteer by email when no id is given.
        """

        hours = Decimal(str(data.hours))
        if hours < 0:
            raise InvalidRecordError("Shift hours must not be negative.")

        email = normalize_email(data.email)
        volunteer_id = data.volunteer_id
        if volunteer_id is None and email:
            volunteer = self.get_by_email(email)
            volunteer_id = volunteer.id if volunteer is not None else None
        elif volunteer_id is not None and not email:
            volunteer = self.get_by_id(volunteer_id)
            if volunteer is None:
                raise VolunteerNotFoundError(f"Volunteer not found: {volunteer_id}")
            email = volunteer.email

        shift = VolunteerShift(
            hours=hours,
            shift_date=data.shift_date or datetime.now(timezone.utc),
            email=email,
            volunteer_id=volunteer_id,
            external_shift_id=data.external_shift_id,
        )
        self._session.add(shift)
        self._session.flush()
        return shift

    def list_shifts(self, volunteer_id: int) -> list[VolunteerShift]:
        stmt = (
            select(VolunteerShift)
            .where(VolunteerShift.volunteer_id == volunteer_id)
            .order_by(VolunteerShift.shift_date.desc(), VolunteerShift.id.desc())
        )
        return list(self._session.scalars(stmt).all())

    def list_shifts_by_email(self, email: str) -> list[VolunteerShift]:
        normalized = normalize_email(email)
        if not normalized:
            return []
        stmt = (
            select(VolunteerShift)
            .where(VolunteerShift.email == normalized)
            .order_by(VolunteerShift.shift_date.desc(), VolunteerShift.id.desc())
        )
        return list(self._session.scalars(stmt).all())

    def _apply(self, volunteer: Volunteer, data: VolunteerInput) -> None:
        for name in _VOLUNTEER_FIELDS:
            value = getattr(data, name)
            if value is not None:
                setattr(volunteer, name, value)
