"""
Seed a handful of donors, donations and volunteer shifts for local testing.

Safe to run repeatedly: donors and volunteers are upserted by email, but
donations and shifts are appended on every run.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal

from app.domain.donor_records import DonationInput, DonorInput, ShiftInput, VolunteerInput
from app.repositories.donor_repository import DonorRepository
from app.repositories.volunteer_repository import VolunteerRepository
from db.session import session_scope

logger = logging.getLogger("scripts.seed_test_donors")

TEST_DONORS: tuple[tuple[DonorInput, tuple[tuple[str, datetime], ...]], ...] = (
    (
        DonorInput(email="jane.doe@example.org", first_name="Jane", last_name="Doe"),
        (
            ("100.00", datetime(2023, 11, 20, tzinfo=timezone.utc)),
            ("250.00", datetime(2024, 12, 1, tzinfo=timezone.utc)),
            ("150.00", datetime(2025, 8, 15, tzinfo=timezone.utc)),
        ),
    ),
    (
        DonorInput(email="sam.lee@example.org", first_name="Sam", last_name="Lee", phone="555-0100"),
        (("50.00", datetime(2025, 3, 3, tzinfo=timezone.utc)),),
    ),
    (
        DonorInput(email="first.timer@example.org", first_name="Alex"),
        (),
    ),
)

TEST_VOLUNTEERS: tuple[tuple[VolunteerInput, tuple[str, ...]], ...] = (
    (VolunteerInput(email="helper@example.org", name="Pat Helper", city="Rochester", state="NY"), ("4", "2.5")),
)


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    seeded_at = datetime.now(timezone.utc)

    with session_scope() as db:
        donors = DonorRepository(db)
        for donor_input, gifts in TEST_DONORS:
            donor, created = donors.upsert_by_email(donor_input, imported_at=seeded_at)
            for amount, timestamp in gifts:
                donors.create_donation(
                    DonationInput(amount=Decimal(amount), timestamp=timestamp, donor_id=donor.id)
                )
            logger.info("Seeded donor %s created=%s donations=%d", donor.email, created, len(gifts))

        volunteers = VolunteerRepository(db)
        for volunteer_input, shifts in TEST_VOLUNTEERS:
            volunteer, created = volunteers.upsert_by_email(volunteer_input)
            for hours in shifts:
                volunteers.create_shift(ShiftInput(hours=Decimal(hours), volunteer_id=volunteer.id))
            logger.info("Seeded volunteer %s created=%s shifts=%d", volunteer.email, created, len(shifts))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
