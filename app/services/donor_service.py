"""
app/services/donor_service.py

Donor lookups and donation logging for the API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from app.domain.donor_records import DonationInput
from app.repositories.donor_repository import DonorRepository, normalize_email
from db.models.donation import Donation
from db.models.donor import Donor
from impact.calculator import DonationImpact, calculate_donation_impact
from impact.fiscal import GivingSummary, resolve_impact_amount, summarize_giving

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DonorProfile:
    """
    Everything the donor landing page needs for one identifier.

    ``donor`` is ``None`` when only orphaned donations exist for the email.
    """

    email: str
    donor: Donor | None
    donations: list[Donation]
    giving: GivingSummary
    impact_amount: Decimal
    impact: DonationImpact

    @property
    def latest_donation(self) -> Donation | None:
        return self.donations[0] if self.donations else None


class DonorService:
    def __init__(self, session: Session) -> None:
        self._session = session
        self._repository = DonorRepository(session)

    def get_profile(self, identifier: str) -> DonorProfile | None:
        """
        Resolve a donor by id or email together with their gift history.

        Donations linked by ``donor_id`` and orphaned donations recorded
        under the same email are merged. Returns ``None`` when neither a
        donor nor any donation matches.
        """

        donor = self._repository.get_by_identifier(identifier)
        if donor is not None:
            email = donor.email
            donations = self._merge(
                self._repository.list_donations(donor.id),
                self._repository.list_donations_by_email(email),
            )
        else:
            email = normalize_email(identifier)
            donations = self._repository.list_donations_by_email(email) if "@" in email else []
            if not donations:
                return None
            logger.info("Donor lookup matched %d orphaned donations email=%s", len(donations), email)

        giving = summarize_giving(donations)
        amount = resolve_impact_amount(giving)
        return DonorProfile(
            email=email,
            donor=donor,
            donations=donations,
            giving=giving,
            impact_amount=amount,
            impact=calculate_donation_impact(amount),
        )

    def log_donation(
        self,
        *,
        amount: Decimal,
        email: str | None = None,
        timestamp: datetime | None = None,
    ) -> Donation:
        donation = self._repository.create_donation(
            DonationInput(amount=amount, timestamp=timestamp, email=email or "")
        )
        self._session.commit()
        logger.info(
            "Donation logged id=%s amount=%s donor_id=%s",
            donation.id,
            donation.amount,
            donation.donor_id,
        )
        return donation

    @staticmethod
    def _merge(*groups: list[Donation]) -> list[Donation]:
        seen: set[int] = set()
        merged: list[Donation] = []
        for group in groups:
            for donation in group:
                if donation.id in seen:
                    continue
                seen.add(donation.id)
                merged.append(donation)
        merged.sort(key=lambda donation: (_naive(donation.timestamp), donation.id), reverse=True)
        return merged


def _naive(moment: datetime) -> datetime:
    return moment.replace(tzinfo=None)
