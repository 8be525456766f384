"""
app/validators/import_row_validator.py

Row-level validation and type parsing for donor spreadsheet imports.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from app.domain.donor_records import DonorInput, ImportRow, RowImportError

TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%m-%d-%Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%b %d, %Y",
    "%B %d, %Y",
)

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_AMOUNT_NOISE = str.maketrans("", "", "$,")


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_PATTERN.match(value))


def parse_amount(value: Any) -> Decimal:
    """
    Parse a currency cell such as ``"$1,250.00"`` or ``1250``.

    Raises ValueError for text that is not a finite number.
    """

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        amount = Decimal(str(value))
    else:
        cleaned = str(value).strip().translate(_AMOUNT_NOISE).strip()
        try:
            amount = Decimal(cleaned)
        except InvalidOperation as exc:
            raise ValueError(f"Invalid amount: {value!r}") from exc

    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a date cell into an aware UTC datetime.

    Accepts datetime/date objects (pandas Timestamps included), ISO-8601
    strings and the common US spreadsheet formats. Raises ValueError
    otherwise.
    """

    if isinstance(value, datetime):
        parsed = value.to_pydatetime() if hasattr(value, "to_pydatetime") else value
        return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    raw = str(value).strip()
    normalized = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
    try:
        parsed = datetime.fromisoformat(normalized)
        return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=timezone.utc)
    except ValueError:
        pass

    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(raw, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue

    raise ValueError(f"Invalid date/time format: {raw!r}")


class ImportRowValidator:
    """
    Validates and parses mapped donor import rows.
    """

    def is_completely_empty_row(self, row: Mapping[str, Any]) -> bool:
        """
        Return True when all values in the row are empty or whitespace.
        """

        return all(self.is_blank(value) for value in row.values())

    def extract_email(self, mapped_row: Mapping[str, Any]) -> str | None:
        value = mapped_row.get("email")
        if self.is_blank(value):
            return None
        return str(value).strip().lower()

    def validate_mapped_row(
        self,
        *,
        mapped_row: Mapping[str, Any],
        row_number: int,
        default_timestamp: datetime,
    ) -> tuple[ImportRow | None, list[RowImportError]]:
        """
        Validate and parse one mapped row that carries an email.

        A blank amount yields a donor-only row (``amount`` is ``None``); a
        blank date falls back to ``default_timestamp``.
        """

        errors: list[RowImportError] = []

        email = self.extract_email(mapped_row) or ""
        if not is_valid_email(email):
            errors.append(
                RowImportError(
                    row_number=row_number,
                    column="email",
                    message="Invalid email address.",
                    value=self._stringify_value(mapped_row.get("email")),
                )
            )

        amount: Decimal | None = None
        raw_amount = mapped_row.get("amount")
        if not self.is_blank(raw_amount):
            try:
                amount = parse_amount(raw_amount)
            except ValueError:
                errors.append(
                    RowImportError(
                        row_number=row_number,
                        column="amount",
                        message="Amount is not a number.",
                        value=self._stringify_value(raw_amount),
                    )
                )
            else:
                if amount < 0:
                    errors.append(
                        RowImportError(
                            row_number=row_number,
                            column="amount",
                            message="Amount must not be negative.",
                            value=self._stringify_value(raw_amount),
                        )
                    )

        timestamp = default_timestamp
        raw_date = mapped_row.get("date")
        if not self.is_blank(raw_date):
            try:
                timestamp = parse_timestamp(raw_date)
            except ValueError:
                errors.append(
                    RowImportError(
                        row_number=row_number,
                        column="date",
                        message="Invalid date/time format.",
                        value=self._stringify_value(raw_date),
                    )
                )

        if errors:
            return None, errors

        return (
            ImportRow(
                row_number=row_number,
                donor=DonorInput(
                    email=email,
                    first_name=self._parse_optional_string(mapped_row.get("first_name")),
                    last_name=self._parse_optional_string(mapped_row.get("last_name")),
                    phone=self._parse_optional_string(mapped_row.get("phone")),
                    external_id=self._parse_optional_string(mapped_row.get("external_id")),
                ),
                amount=amount,
                timestamp=timestamp,
                external_donation_id=self._parse_optional_string(mapped_row.get("external_donation_id")),
            ),
            [],
        )

    def _parse_optional_string(self, value: Any) -> str | None:
        if self.is_blank(value):
            return None
        # spreadsheet readers hand back 5551234567.0 for numeric phone/id cells
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value).strip()

    @staticmethod
    def is_blank(value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, float) and math.isnan(value):
            return True
        return str(value).strip() == ""

    @staticmethod
    def _stringify_value(value: Any) -> str | None:
        if value is None:
            return None
        return str(value)
