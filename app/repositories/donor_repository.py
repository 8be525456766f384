"""
app/repositories/donor_repository.py

Persistence layer for donors and their donations.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.domain.donor_records import DonationInput, DonorInput
from app.repositories.errors import DonorNotFoundError, InvalidRecordError
from db.models.donation import Donation
from db.models.donor import Donor

_DONOR_FIELDS = ("first_name", "last_name", "phone", "external_id")


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


class DonorRepository:
    """
    Repository for donor lookups, upserts and donation writes.

    Writes are flushed, never committed; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    # ── Donors ────────────────────────────────────────────────────────────────

    def get_by_id(self, donor_id: int) -> Donor | None:
        return self._session.get(Donor, donor_id)

    def get_by_email(self, email: str) -> Donor | None:
        normalized = normalize_email(email)
        if not normalized:
            return None
        stmt = select(Donor).where(Donor.email == normalized)
        return self._session.scalars(stmt).first()

    def get_by_identifier(self, identifier: str) -> Donor | None:
        """
        Look up a donor by numeric id or by email.
        """

        value = identifier.strip()
        if value.isdigit():
            return self.get_by_id(int(value))
        return self.get_by_email(value)

    def create(self, data: DonorInput, *, imported_at: datetime | None = None) -> Donor:
        email = normalize_email(data.email)
        if not email:
            raise InvalidRecordError("Donor email is required.")

        donor = Donor(
            email=email,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            external_id=data.external_id,
            last_imported=imported_at,
        )
        self._session.add(donor)
        self._session.flush()
        return donor

    def update(self, donor_id: int, data: DonorInput, *, imported_at: datetime | None = None) -> Donor:
        """
        Apply the provided (non-``None``) fields of ``data`` to an existing donor.
        """

        donor = self.get_by_id(donor_id)
        if donor is None:
            raise DonorNotFoundError(f"Donor not found: {donor_id}")

        self._apply(donor, data)
        if imported_at is not None:
            donor.last_imported = imported_at
        self._session.flush()
        return donor

    def upsert_by_email(
        self,
        data: DonorInput,
        *,
        imported_at: datetime | None = None,
    ) -> tuple[Donor, bool]:
        """
        Create the donor for ``data.email`` or update the existing one.

        Returns the donor and whether it was newly created.
        """

        existing = self.get_by_email(data.email)
        if existing is None:
            return self.create(data, imported_at=imported_at), True

        self._apply(existing, data)
        if imported_at is not None:
            existing.last_imported = imported_at
        self._session.flush()
        return existing, False

    # ── Donations ─────────────────────────────────────────────────────────────

    def create_donation(self, data: DonationInput) -> Donation:
        """
        Insert one donation. Never deduplicates.

        Without ``donor_id`` the donor is resolved by email; when nothing
        matches the donation is stored orphaned with only its email.
        """

        amount = Decimal(str(data.amount))
        if amount < 0:
            raise InvalidRecordError("Donation amount must not be negative.")

        email = normalize_email(data.email)
        donor_id = data.donor_id
        if donor_id is None and email:
            donor = self.get_by_email(email)
            donor_id = donor.id if donor is not None else None
        elif donor_id is not None and not email:
            donor = self.get_by_id(donor_id)
            if donor is None:
                raise DonorNotFoundError(f"Donor not found: {donor_id}")
            email = donor.email

        donation = Donation(
            amount=amount,
            timestamp=data.timestamp or datetime.now(timezone.utc),
            email=email,
            donor_id=donor_id,
            external_donation_id=data.external_donation_id,
            imported=1 if data.imported else 0,
        )
        self._session.add(donation)
        self._session.flush()
        return donation

    def list_donations(self, donor_id: int) -> list[Donation]:
        """
        Donations of one donor, most recent first.
        """

        stmt = (
            select(Donation)
            .where(Donation.donor_id == donor_id)
            .order_by(Donation.timestamp.desc(), Donation.id.desc())
        )
        return list(self._session.scalars(stmt).all())

    def list_donations_by_email(self, email: str) -> list[Donation]:
        """
        Donations recorded under ``email``, linked or orphaned, most recent first.
        """

        normalized = normalize_email(email)
        if not normalized:
            return []
        stmt = (
            select(Donation)
            .where(Donation.email == normalized)
            .order_by(Donation.timestamp.desc(), Donation.id.desc())
        )
        return list(self._session.scalars(stmt).all())

    def find_donations_by_external_id(
        self,
        external_donation_id: str,
        *,
        donor_id: int | None = None,
    ) -> list[Donation]:
        stmt = select(Donation).where(Donation.external_donation_id == external_donation_id)
        if donor_id is not None:
            stmt = stmt.where(Donation.donor_id == donor_id)
        return list(self._session.scalars(stmt.order_by(Donation.id)).all())

    def list_donations_since(self, since: datetime | None = None) -> list[Donation]:
        stmt = select(Donation)
        if since is not None:
            stmt = stmt.where(Donation.timestamp >= since)
        return list(self._session.scalars(stmt.order_by(Donation.id)).all())

    def _apply(self, donor: Donor, data: DonorInput) -> None:
        for name in _DONOR_FIELDS:
            value = getattr(data, name)
            if value is not None:
                setattr(donor, name, value)
