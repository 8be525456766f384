"""
tests/test_donor_import_service.py

End-to-end import tests: file bytes in, summary out, rows in SQLite.
"""

from __future__ import annotations

import io
import json
import logging
from decimal import Decimal

import pandas as pd
import pytest
from sqlalchemy.exc import IntegrityError

from app.repositories.donor_repository import DonorRepository
from app.services.donor_import_service import (
    DonorImportService,
    ImportHeaderError,
    read_import_frame,
)


@pytest.fixture()
def service() -> DonorImportService:
    return DonorImportService(batch_size=2, max_errors=10, log_row_errors=True)


def _xlsx(rows: list[dict]) -> bytes:
    buffer = io.BytesIO()
    pd.DataFrame(rows).to_excel(buffer, index=False, engine="openpyxl")
    return buffer.getvalue()


def _csv(text: str) -> bytes:
    return text.strip().encode("utf-8")


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------


def test_import_xlsx_creates_donors_and_donations(service: DonorImportService, db_session) -> None:
    content = _xlsx(
        [
            {"Email": "jane@example.org", "First Name": "Jane", "Amount": 100, "Date": "2025-01-15"},
            {"Email": "sam@example.org", "First Name": "Sam", "Amount": "$1,250.50", "Date": "03/02/2025"},
            {"Email": "JANE@example.org", "First Name": "Jane", "Amount": 50, "Date": "2025-02-01"},
        ]
    )

    summary = service.import_file(filename="donors.xlsx", content=content, db=db_session)

    assert summary.total == 3
    assert summary.successful == 3
    assert summary.failed == 0
    assert summary.errors == []
    assert summary.donors_created == 2
    assert summary.donors_updated == 1
    assert summary.donations_created == 3

    repository = DonorRepository(db_session)
    jane = repository.get_by_email("jane@example.org")
    amounts = sorted(donation.amount for donation in repository.list_donations(jane.id))
    assert amounts == [Decimal("50"), Decimal("100")]
    assert all(donation.imported == 1 for donation in repository.list_donations(jane.id))

    sam = repository.get_by_email("sam@example.org")
    assert repository.list_donations(sam.id)[0].amount == Decimal("1250.50")


def test_donor_only_rows_create_no_donations(service: DonorImportService, db_session) -> None:
    content = _csv(
        """
Email Address,First Name,Last Name
jane@example.org,Jane,Doe
sam@example.org,Sam,
"""
    )

    summary = service.import_file(filename="donors.csv", content=content, db=db_session)

    assert summary.successful == 2
    assert summary.donations_created == 0
    assert DonorRepository(db_session).get_by_email("jane@example.org").last_name == "Doe"


def test_blank_amount_only_creates_donor(service: DonorImportService, db_session) -> None:
    content = _csv(
        """
Email,Amount
jane@example.org,
sam@example.org,20
"""
    )

    summary = service.import_file(filename="donors.csv", content=content, db=db_session)

    assert summary.donors_created == 2
    assert summary.donations_created == 1


def test_import_json_records(service: DonorImportService, db_session) -> None:
    content = json.dumps(
        [
            {"email": "jane@example.org", "amount": 25, "date": "2025-01-01T10:00:00Z"},
            {"email": "sam@example.org"},
        ]
    ).encode("utf-8")

    summary = service.import_file(filename="donors.json", content=content, db=db_session)

    assert summary.successful == 2
    assert summary.donations_created == 1


# ---------------------------------------------------------------------------
# Row-level problems
# ---------------------------------------------------------------------------


def test_rows_without_email_are_skipped(service: DonorImportService, db_session) -> None:
    content = _csv(
        """
Email,Amount
,10
jane@example.org,20
,
"""
    )

    summary = service.import_file(filename="donors.csv", content=content, db=db_session)

    assert summary.total == 1
    assert summary.successful == 1
    assert summary.skipped == 2


def test_invalid_rows_are_reported_and_do_not_stop_import(service: DonorImportService, db_session) -> None:
    content = _csv(
        """
Email,Amount,Date
not-an-email,10,2025-01-01
jane@example.org,ten dollars,2025-01-01
sam@example.org,-5,2025-01-01
kim@example.org,5,someday
lee@example.org,15,2025-01-01
"""
    )

    summary = service.import_file(filename="donors.csv", content=content, db=db_session)

    assert summary.total == 5
    assert summary.successful == 1
    assert summary.failed == 4
    assert summary.errors[0].startswith("Row 2: Invalid email address.")
    assert any("Row 3" in error and "column=amount" in error for error in summary.errors)
    assert any("Row 4" in error and "must not be negative" in error for error in summary.errors)
    assert any("Row 5" in error and "column=date" in error for error in summary.errors)
    assert DonorRepository(db_session).get_by_email("lee@example.org") is not None
    assert DonorRepository(db_session).get_by_email("jane@example.org") is None


def test_error_list_is_capped(db_session) -> None:
    service = DonorImportService(batch_size=100, max_errors=2, log_row_errors=False)
    content = _csv(
        """
Email,Amount
a@example.org,x
b@example.org,x
c@example.org,x
"""
    )

    summary = service.import_file(filename="donors.csv", content=content, db=db_session)

    assert summary.failed == 3
    assert len(summary.errors) == 2


def test_reimport_flags_possible_duplicates(service: DonorImportService, db_session, caplog) -> None:
    content = _csv(
        """
Email,Amount,Donation ID
jane@example.org,10,G-1
"""
    )
    service.import_file(filename="donors.csv", content=content, db=db_session)

    with caplog.at_level(logging.WARNING, logger="app.services.donor_import_service"):
        summary = service.import_file(filename="donors.csv", content=content, db=db_session)

    assert summary.donations_created == 1
    assert "Possible duplicate donation" in caplog.text
    repository = DonorRepository(db_session)
    jane = repository.get_by_email("jane@example.org")
    assert len(repository.list_donations(jane.id)) == 2


def test_row_save_error_rolls_back_only_that_row(service: DonorImportService, db_session, monkeypatch) -> None:
    original_create = DonorRepository.create_donation

    def create_donation(self, data):
        if data.email == "bad@example.org":
            raise IntegrityError("INSERT INTO donations", {}, Exception("constraint failed"))
        return original_create(self, data)

    monkeypatch.setattr(DonorRepository, "create_donation", create_donation)
    content = _csv(
        """
Email,Amount
a@example.org,10
bad@example.org,20
c@example.org,30
"""
    )

    summary = service.import_file(filename="donors.csv", content=content, db=db_session)

    assert summary.successful == 2
    assert summary.failed == 1
    assert summary.errors[0].startswith("Row 3: Could not save row")
    repository = DonorRepository(db_session)
    assert repository.get_by_email("bad@example.org") is None
    assert repository.get_by_email("a@example.org") is not None
    c_donor = repository.get_by_email("c@example.org")
    assert [donation.amount for donation in repository.list_donations(c_donor.id)] == [Decimal("30")]


# ---------------------------------------------------------------------------
# File-level problems
# ---------------------------------------------------------------------------


def test_missing_email_column_is_header_error(service: DonorImportService, db_session) -> None:
    with pytest.raises(ImportHeaderError) as exc_info:
        service.import_file(filename="donors.csv", content=_csv("Name,Amount\nJane,10"), db=db_session)

    payload = exc_info.value.to_dict()
    assert "email" in payload["message"]
    assert payload["errors"]


def test_mailing_address_column_is_not_taken_for_email(service: DonorImportService, db_session) -> None:
    content = _csv("Name,Mailing Address,Amount\nJane,12 Main St,10")

    with pytest.raises(ImportHeaderError):
        service.import_file(filename="donors.csv", content=content, db=db_session)


@pytest.mark.parametrize(
    ("filename", "content"),
    [
        ("donors.txt", b"Email\njane@example.org"),
        ("donors.csv", b""),
        ("donors.xlsx", b"definitely not a workbook"),
        ("donors.json", b'{"email": "jane@example.org"}'),
        ("donors.json", b"[not json"),
        ("donors.csv", b"\xff\xfe\x00bad"),
    ],
)
def test_unreadable_files_raise_header_error(filename: str, content: bytes) -> None:
    with pytest.raises(ImportHeaderError):
        read_import_frame(filename, content)


def test_numeric_cells_are_stringified_cleanly(service: DonorImportService, db_session) -> None:
    content = _xlsx([{"Email": "jane@example.org", "Phone": 5551234567, "Donor ID": 42}])

    service.import_file(filename="donors.xlsx", content=content, db=db_session)

    jane = DonorRepository(db_session).get_by_email("jane@example.org")
    assert jane.phone == "5551234567"
    assert jane.external_id == "42"
