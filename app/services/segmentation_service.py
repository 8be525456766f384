"""
app/services/segmentation_service.py

Ad-hoc donor segments computed from donation history.

A segment is evaluated on request and never stored. Donations in the
selected window are grouped per donor (orphaned donations per email), then
each group's total and gift count are checked against the criteria.
"""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from app.domain.segmentation import DateRange, DonationFrequency, SegmentCriteria, SegmentResult
from app.repositories.donor_repository import DonorRepository

logger = logging.getLogger(__name__)


_WINDOW_DAYS: dict[DateRange, int] = {
    DateRange.LAST_YEAR: 365,
    DateRange.LAST_QUARTER: 90,
}

_WINDOW_LABELS: dict[DateRange, str] = {
    DateRange.LAST_YEAR: "Last 12 months",
    DateRange.LAST_QUARTER: "Last 3 months",
}


class InvalidSegmentError(ValueError):
    """
    Raised when segment criteria contradict each other.
    """


class SegmentationService:
    def create_segment(
        self,
        criteria: SegmentCriteria,
        db: Session,
        *,
        now: datetime | None = None,
    ) -> SegmentResult:
        """
        Count donors matching ``criteria``.

        ``donation_min`` / ``donation_max`` bound a donor's total giving
        inside the window (both inclusive).
        """

        if (
            criteria.donation_min is not None
            and criteria.donation_max is not None
            and criteria.donation_min > criteria.donation_max
        ):
            raise InvalidSegmentError("donationMin must not exceed donationMax.")

        since = self._window_start(criteria.date_range, now or datetime.now(timezone.utc))
        donations = DonorRepository(db).list_donations_since(since)

        totals: dict[object, Decimal] = defaultdict(Decimal)
        counts: dict[object, int] = defaultdict(int)
        for donation in donations:
            if donation.donor_id is not None:
                key: object = donation.donor_id
            elif criteria.include_no_email and donation.email:
                key = f"email:{donation.email}"
            else:
                continue
            totals[key] += Decimal(donation.amount)
            counts[key] += 1

        donor_count = sum(
            1 for key, total in totals.items() if self._matches(criteria, total=total, count=counts[key])
        )
        result = SegmentResult(
            id=f"segment-{uuid.uuid4().hex[:12]}",
            name=criteria.name or self._default_name(criteria),
            donor_count=donor_count,
            criteria=self._describe(criteria),
        )
        logger.info("Segment evaluated name=%r donors=%d", result.name, donor_count)
        return result

    @staticmethod
    def _window_start(date_range: DateRange, now: datetime) -> datetime | None:
        days = _WINDOW_DAYS.get(date_range)
        return now - timedelta(days=days) if days is not None else None

    @staticmethod
    def _matches(criteria: SegmentCriteria, *, total: Decimal, count: int) -> bool:
        if criteria.donation_min is not None and total < criteria.donation_min:
            return False
        if criteria.donation_max is not None and total > criteria.donation_max:
            return False
        if criteria.donation_frequency is DonationFrequency.SINGLE and count != 1:
            return False
        if criteria.donation_frequency is DonationFrequency.MULTIPLE and count < 2:
            return False
        return True

    @staticmethod
    def _default_name(criteria: SegmentCriteria) -> str:
        low = criteria.donation_min if criteria.donation_min is not None else 0
        high = criteria.donation_max if criteria.donation_max is not None else "∞"
        return f"Donation ${low} - ${high}"

    @staticmethod
    def _describe(criteria: SegmentCriteria) -> list[str]:
        described: list[str] = []
        if criteria.donation_min is not None:
            described.append(f"Donation >= ${criteria.donation_min}")
        if criteria.donation_max is not None:
            described.append(f"Donation <= ${criteria.donation_max}")
        if criteria.date_range in _WINDOW_LABELS:
            described.append(_WINDOW_LABELS[criteria.date_range])
        if criteria.donation_frequency is DonationFrequency.SINGLE:
            described.append("One-time donors")
        elif criteria.donation_frequency is DonationFrequency.MULTIPLE:
            described.append("Repeat donors")
        if criteria.include_no_email:
            described.append("Includes unmatched donation emails")
        return described
