from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.domain.donor_records import DonationInput, DonorInput
from app.domain.segmentation import DateRange, DonationFrequency, SegmentCriteria
from app.repositories.donor_repository import DonorRepository
from app.services.segmentation_service import InvalidSegmentError, SegmentationService

NOW = datetime(2025, 10, 1, tzinfo=timezone.utc)


@pytest.fixture()
def seeded(db_session):
    repository = DonorRepository(db_session)
    gifts = {
        "small@example.org": [("20", 10)],
        "repeat@example.org": [("60", 20), ("60", 200)],
        "big@example.org": [("500", 30)],
        "lapsed@example.org": [("80", 500)],
    }
    for email, donations in gifts.items():
        donor = repository.create(DonorInput(email=email))
        for amount, days_ago in donations:
            repository.create_donation(
                DonationInput(amount=Decimal(amount), donor_id=donor.id, timestamp=NOW - timedelta(days=days_ago))
            )
    repository.create_donation(
        DonationInput(amount=Decimal("75"), email="walkin@example.org", timestamp=NOW - timedelta(days=5))
    )
    db_session.commit()
    return db_session


def _segment(db, **criteria):
    return SegmentationService().create_segment(SegmentCriteria(**criteria), db, now=NOW)


def test_all_donors_with_any_gift(seeded) -> None:
    assert _segment(seeded).donor_count == 4


def test_total_giving_bounds_are_inclusive(seeded) -> None:
    result = _segment(seeded, donation_min=Decimal("80"), donation_max=Decimal("120"))

    assert result.donor_count == 2
    assert result.criteria == ["Donation >= $80", "Donation <= $120"]


def test_last_year_window_uses_in_window_totals(seeded) -> None:
    result = _segment(seeded, donation_min=Decimal("50"), date_range=DateRange.LAST_YEAR)

    # repeat (120) and big (500); lapsed gave outside the window
    assert result.donor_count == 2
    assert "Last 12 months" in result.criteria


def test_frequency_filters(seeded) -> None:
    assert _segment(seeded, donation_frequency=DonationFrequency.MULTIPLE).donor_count == 1
    assert _segment(seeded, donation_frequency=DonationFrequency.SINGLE).donor_count == 3


def test_quarter_window_with_repeat_donors(seeded) -> None:
    result = _segment(
        seeded,
        donation_frequency=DonationFrequency.MULTIPLE,
        date_range=DateRange.LAST_QUARTER,
    )

    assert result.donor_count == 0
    assert result.criteria == ["Last 3 months", "Repeat donors"]


def test_include_no_email_counts_unmatched_donations(seeded) -> None:
    result = _segment(seeded, include_no_email=True)

    assert result.donor_count == 5
    assert result.criteria == ["Includes unmatched donation emails"]


def test_default_name_and_id(seeded) -> None:
    result = _segment(seeded, donation_min=Decimal("10"))

    assert result.name == "Donation $10 - $∞"
    assert result.id.startswith("segment-")
    assert len(result.id) == len("segment-") + 12


def test_explicit_name_is_kept(seeded) -> None:
    assert _segment(seeded, name="Major donors").name == "Major donors"


def test_min_above_max_is_rejected(db_session) -> None:
    with pytest.raises(InvalidSegmentError):
        _segment(db_session, donation_min=Decimal("100"), donation_max=Decimal("10"))
