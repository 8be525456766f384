"""
tests/test_convert_wrapped_donors.py

Wrapped donor export conversion, checked end to end through the importer.
"""

from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

import pytest

from app.repositories.donor_repository import DonorRepository
from app.services.donor_import_service import DonorImportService
from scripts.convert_wrapped_donors import clean_currency, main, parse_export_date

EXPORT_CSV = """\
Constituent ID,Name,Email Address,Phone Number,Total Number of Gifts,Lifetime Giving,Last Gift Date,Last Gift Amount,Total Giving FY22,Total Giving FY23,Total Giving FY24,Total Giving FY25
101,Jane Q Doe,jane@example.org,555-0100,3,"$1,500.00",03/15/2025,$250.00,,$500.00,$750.00,$250.00
102,Sam,,,1,$40.00,,,,,,
,,nobody@example.org,,,,,,,,,
103,Kim Lee,kim@example.org,,0,,,,,,,
104,Bad Row,bad@example.org,,1,lots,,,,,,
"""


@pytest.fixture()
def export_path(tmp_path):
    path = tmp_path / "Wrapped donor info.csv"
    path.write_text(EXPORT_CSV, encoding="utf-8")
    return path


def test_clean_currency() -> None:
    assert clean_currency("$1,250.00") == Decimal("1250.00")
    assert clean_currency("") == Decimal("0")
    assert clean_currency(None) == Decimal("0")
    assert clean_currency(75) == Decimal("75")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("03/15/2025", date(2025, 3, 15)),
        ("2024-07-01", date(2024, 7, 1)),
        (45000, date(2023, 3, 15)),
        ("", None),
    ],
)
def test_parse_export_date(value, expected) -> None:
    assert parse_export_date(value) == expected


def test_conversion_writes_rows_per_gift(export_path, tmp_path, capsys) -> None:
    output = tmp_path / "wrapped-donors.json"

    assert main([str(export_path), "--output", str(output)]) == 0

    assert capsys.readouterr().out.startswith("donors=3 rows=6 skipped=2")
    records = json.loads(output.read_text(encoding="utf-8"))

    jane = [record for record in records if record["email"] == "jane@example.org"]
    assert [(record["amount"], record["date"], record["external_donation_id"]) for record in jane] == [
        ("250.00", "2025-03-15", "101-last"),
        ("500.00", "2023-01-01", "101-fy23"),
        ("750.00", "2024-01-01", "101-fy24"),
        ("250.00", "2025-01-01", "101-fy25"),
    ]
    assert jane[0]["first_name"] == "Jane"
    assert jane[0]["last_name"] == "Q Doe"

    sam = next(record for record in records if record["external_id"] == "102")
    assert sam["email"] == "donor-102@example.com"
    assert sam["amount"] == "40.00"
    assert sam["date"] is None
    assert sam["last_name"] is None

    kim = next(record for record in records if record["external_id"] == "103")
    assert kim["amount"] is None

    assert (tmp_path / "wrapped-donors-sample.json").is_file()


def test_converted_rows_import_cleanly(export_path, tmp_path, db_session) -> None:
    output = tmp_path / "wrapped-donors.json"
    main([str(export_path), "--output", str(output), "--sample-size", "0"])
    service = DonorImportService(batch_size=10, max_errors=10, log_row_errors=False)

    summary = service.import_file(filename=output.name, content=output.read_bytes(), db=db_session)

    assert summary.total == 6
    assert summary.successful == 6
    assert summary.failed == 0
    assert summary.donors_created == 3
    assert summary.donations_created == 5

    repository = DonorRepository(db_session)
    jane = repository.get_by_email("jane@example.org")
    assert jane.external_id == "101"
    assert sorted(donation.amount for donation in repository.list_donations(jane.id)) == [
        Decimal("250.00"),
        Decimal("250.00"),
        Decimal("500.00"),
        Decimal("750.00"),
    ]
    assert repository.list_donations(repository.get_by_email("kim@example.org").id) == []


def test_missing_export_returns_2(tmp_path) -> None:
    assert main([str(tmp_path / "missing.csv")]) == 2
