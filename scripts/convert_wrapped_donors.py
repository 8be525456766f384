"""
Convert a "Wrapped Donor Info" CRM export into importable donor rows.

    python -m scripts.convert_wrapped_donors "Wrapped donor info.csv" --output wrapped-donors.json

The export carries one summary line per constituent (lifetime giving, last
gift, FY22-FY25 totals). Each donor becomes one import row per known gift:
the last gift, then one row per fiscal year with giving, dated January 1st
of that year. Donors with no gift rows fall back to a single lifetime row,
or a donor-only row when they have given nothing.

The output is a JSON array that ``scripts.import_excel`` accepts.
"""

from __future__ import annotations

import argparse
import json
import logging
import statistics
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Mapping

import pandas as pd

from app.services.donor_import_service import ImportHeaderError, read_import_frame
from app.validators.import_row_validator import ImportRowValidator, parse_amount, parse_timestamp

logger = logging.getLogger("scripts.convert_wrapped_donors")

FISCAL_YEAR_COLUMNS: dict[str, str] = {
    "fy22": "Total Giving FY22",
    "fy23": "Total Giving FY23",
    "fy24": "Total Giving FY24",
    "fy25": "Total Giving FY25",
}

PLACEHOLDER_EMAIL_DOMAIN = "example.com"
DEFAULT_SAMPLE_SIZE = 100

_is_blank = ImportRowValidator.is_blank


@dataclass(frozen=True)
class WrappedDonor:
    constituent_id: str
    name: str
    email: str | None
    phone: str | None
    lifetime_giving: Decimal
    last_gift_amount: Decimal
    last_gift_date: date | None
    fiscal_year_giving: dict[str, Decimal] = field(default_factory=dict)


@dataclass(frozen=True)
class ConversionResult:
    donors: list[WrappedDonor]
    records: list[dict[str, Any]]
    skipped: int


def clean_currency(value: Any) -> Decimal:
    """
    ``"$1,250.00"`` -> ``Decimal("1250.00")``; blank cells are zero.
    """

    if _is_blank(value):
        return Decimal("0")
    return parse_amount(value)


def parse_export_date(value: Any) -> date | None:
    """
    Parse MM/DD/YYYY, ISO or Excel serial day numbers. Blank cells are None.
    """

    if _is_blank(value):
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return pd.to_datetime(value, unit="D", origin="1899-12-30").date()
    return parse_timestamp(value).date()


def read_wrapped_donor(row: Mapping[str, Any], *, row_index: int) -> WrappedDonor | None:
    """
    Read one export row. Rows without a name return None.

    Raises ValueError for unparseable amounts or dates.
    """

    name = row.get("Name")
    if _is_blank(name):
        return None

    constituent_id = _optional_text(row.get("Constituent ID")) or str(row_index)
    return WrappedDonor(
        constituent_id=constituent_id,
        name=str(name).strip(),
        email=_optional_text(row.get("Email Address")),
        phone=_optional_text(row.get("Phone Number")),
        lifetime_giving=clean_currency(row.get("Lifetime Giving")),
        last_gift_amount=clean_currency(row.get("Last Gift Amount")),
        last_gift_date=parse_export_date(row.get("Last Gift Date")),
        fiscal_year_giving={
            label: clean_currency(row.get(column)) for label, column in FISCAL_YEAR_COLUMNS.items()
        },
    )


def to_import_records(donor: WrappedDonor) -> list[dict[str, Any]]:
    first_name, _, last_name = donor.name.partition(" ")
    base = {
        "email": donor.email or f"donor-{donor.constituent_id}@{PLACEHOLDER_EMAIL_DOMAIN}",
        "first_name": first_name,
        "last_name": last_name.strip() or None,
        "phone": donor.phone,
        "external_id": donor.constituent_id,
    }

    gifts: list[tuple[Decimal, str | None, str]] = []
    if donor.last_gift_amount > 0:
        gift_date = donor.last_gift_date.isoformat() if donor.last_gift_date else None
        gifts.append((donor.last_gift_amount, gift_date, "last"))
    for label, amount in donor.fiscal_year_giving.items():
        if amount > 0:
            gifts.append((amount, f"20{label[2:]}-01-01", label))
    if not gifts and donor.lifetime_giving > 0:
        # blank date imports as the import time
        gifts.append((donor.lifetime_giving, None, "lifetime"))

    if not gifts:
        return [{**base, "amount": None, "date": None, "external_donation_id": None}]
    return [
        {
            **base,
            "amount": str(amount),
            "date": gift_date,
            "external_donation_id": f"{donor.constituent_id}-{suffix}",
        }
        for amount, gift_date, suffix in gifts
    ]


def convert_frame(frame: pd.DataFrame) -> ConversionResult:
    donors: list[WrappedDonor] = []
    records: list[dict[str, Any]] = []
    skipped = 0

    cleaned = frame.astype(object).where(pd.notna(frame), None)
    for row_index, row in enumerate(cleaned.to_dict(orient="records")):
        try:
            donor = read_wrapped_donor(row, row_index=row_index)
        except ValueError as exc:
            logger.warning("Skipping export row %d: %s", row_index, exc)
            skipped += 1
            continue
        if donor is None:
            skipped += 1
            continue
        donors.append(donor)
        records.extend(to_import_records(donor))

    return ConversionResult(donors=donors, records=records, skipped=skipped)


def summarize(donors: list[WrappedDonor]) -> dict[str, Any]:
    gift_sizes = [donor.last_gift_amount for donor in donors if donor.last_gift_amount > 0]
    return {
        "total_donors": len(donors),
        "total_lifetime_giving": float(sum((donor.lifetime_giving for donor in donors), Decimal("0"))),
        "average_gift_size": float(statistics.mean(gift_sizes)) if gift_sizes else 0.0,
        "median_gift_size": float(statistics.median(gift_sizes)) if gift_sizes else 0.0,
        "giving_by_fiscal_year": {
            label: float(sum((donor.fiscal_year_giving.get(label, Decimal("0")) for donor in donors), Decimal("0")))
            for label in FISCAL_YEAR_COLUMNS
        },
    }


def _optional_text(value: Any) -> str | None:
    if _is_blank(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert a Wrapped donor export into import rows.")
    parser.add_argument("path", type=Path, help=".csv, .xlsx or .json export")
    parser.add_argument("--output", type=Path, default=Path("wrapped-donors.json"))
    parser.add_argument(
        "--sample-size",
        type=int,
        default=DEFAULT_SAMPLE_SIZE,
        help="donors written to the <output>-sample.json file (0 disables it)",
    )
    return parser.parse_args(argv)


def _write_records(path: Path, records: list[dict[str, Any]]) -> None:
    path.write_text(json.dumps(records, indent=2), encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    args = _parse_args(argv)

    if not args.path.is_file():
        logger.error("File not found: %s", args.path)
        return 2

    try:
        frame = read_import_frame(args.path.name, args.path.read_bytes())
    except ImportHeaderError as exc:
        logger.error("Could not read export: %s", exc)
        return 1

    result = convert_frame(frame)
    _write_records(args.output, result.records)
    print(f"donors={len(result.donors)} rows={len(result.records)} skipped={result.skipped} output={args.output}")

    if args.sample_size > 0:
        sample_ids = {donor.constituent_id for donor in result.donors[: args.sample_size]}
        sample_path = args.output.with_name(f"{args.output.stem}-sample.json")
        _write_records(
            sample_path,
            [record for record in result.records if record["external_id"] in sample_ids],
        )
        print(f"sample={sample_path}")

    print(json.dumps(summarize(result.donors), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
