"""
app/domain/donor_records.py

Domain models shared by the donor store, the import pipeline and the API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class DonorInput:
    """
    Donor attributes to create or update. ``None`` fields are left untouched
    on update.
    """

    email: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    external_id: str | None = None


@dataclass(frozen=True)
class DonationInput:
    """
    One donation to record.

    ``donor_id`` wins when present; otherwise the donor is resolved from
    ``email`` and the row is stored orphaned if no donor matches.
    """

    amount: Decimal
    timestamp: datetime | None = None
    email: str = ""
    donor_id: int | None = None
    external_donation_id: str | None = None
    imported: bool = False


@dataclass(frozen=True)
class VolunteerInput:
    email: str
    name: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None


@dataclass(frozen=True)
class ShiftInput:
    hours: Decimal
    shift_date: datetime | None = None
    email: str = ""
    volunteer_id: int | None = None
    external_shift_id: str | None = None


@dataclass(frozen=True)
class ImportRow:
    """
    One spreadsheet row after column mapping and value parsing.
    """

    row_number: int
    donor: DonorInput
    amount: Decimal | None
    timestamp: datetime
    external_donation_id: str | None = None


@dataclass(frozen=True)
class RowImportError:
    """
    One failed spreadsheet row.
    """

    row_number: int
    message: str
    column: str | None = None
    value: str | None = None

    def describe(self) -> str:
        if self.column:
            return f"Row {self.row_number}: {self.message} (column={self.column}, value={self.value!r})"
        return f"Row {self.row_number}: {self.message}"


@dataclass(frozen=True)
class ImportSummary:
    """
    End-of-run import summary.

    ``total`` counts rows that carried an email; rows without one are
    counted in ``skipped`` only.
    """

    total: int
    successful: int
    failed: int
    errors: list[str] = field(default_factory=list)
    skipped: int = 0
    donors_created: int = 0
    donors_updated: int = 0
    donations_created: int = 0
