"""
app/services/donor_import_service.py

Service layer for donor spreadsheet imports.

Reads the first sheet of an Excel workbook (or a CSV / JSON export), maps
its headers onto donor fields, upserts one donor per row by email and
inserts a donation for every row that carries an amount.

Rows without an email are skipped and do not count towards ``total``.
Every remaining row is written inside its own savepoint, so one bad row is
rolled back on its own and the import continues. Work is committed every
``batch_size`` successful rows.
"""

from __future__ import annotations

import io
import json
import logging
import zipfile
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_import_settings
from app.domain.donor_records import DonationInput, ImportRow, ImportSummary, RowImportError
from app.mappers.donor_column_mapper import ColumnResolution, DonorColumnMapper
from app.repositories.donor_repository import DonorRepository
from app.repositories.errors import StoreError
from app.validators.import_row_validator import ImportRowValidator
from app.validators.mapping_validator import ColumnMappingError

logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = frozenset({".xlsx", ".xlsm", ".xls"})
SUPPORTED_EXTENSIONS = EXCEL_EXTENSIONS | {".csv", ".json"}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ImportHeaderError(ValueError):
    """
    Raised when the file cannot be read or has no usable email column.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"message": str(self)}
        if self.details:
            payload.update(self.details)
        return payload


class ImportPersistenceError(RuntimeError):
    """
    Raised when a batch of imported rows cannot be committed.
    """


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class DonorImportService:
    """
    Coordinates file parsing, header mapping, row validation and persistence.
    """

    def __init__(
        self,
        *,
        batch_size: int,
        max_errors: int,
        log_row_errors: bool,
        mapper: DonorColumnMapper | None = None,
        validator: ImportRowValidator | None = None,
    ) -> None:
        self._batch_size = max(1, batch_size)
        self._max_errors = max(1, max_errors)
        self._log_row_errors = log_row_errors
        self._mapper = mapper or DonorColumnMapper()
        self._validator = validator or ImportRowValidator()

    def import_file(self, *, filename: str, content: bytes, db: Session) -> ImportSummary:
        """
        Import one uploaded file.

        Args:
            filename: Original file name; its extension selects the reader.
            content:  Raw file bytes.
            db:       Active SQLAlchemy session (caller owns lifecycle).

        Raises:
            ImportHeaderError:      unreadable file, unknown format or no email column.
            ImportPersistenceError: a batch commit failed.
        """

        frame = read_import_frame(filename, content)
        try:
            resolution = self._mapper.resolve(list(frame.columns))
        except ColumnMappingError as exc:
            raise ImportHeaderError(exc.message, details=exc.to_dict()) from exc

        logger.info(
            "Donor import started file=%s rows=%d mapping=%s",
            filename,
            len(frame.index),
            resolution.field_to_source,
        )
        summary = self._import_records(records=_frame_records(frame), resolution=resolution, db=db)
        logger.info(
            "Donor import finished file=%s total=%d successful=%d failed=%d skipped=%d",
            filename,
            summary.total,
            summary.successful,
            summary.failed,
            summary.skipped,
        )
        return summary

    def _import_records(
        self,
        *,
        records: list[dict[str, Any]],
        resolution: ColumnResolution,
        db: Session,
    ) -> ImportSummary:
        repository = DonorRepository(db)
        imported_at = datetime.now(timezone.utc)

        total = successful = failed = skipped = 0
        donors_created = donors_updated = donations_created = 0
        captured_errors: list[str] = []
        pending = 0

        # header is row 1 in the source sheet
        for row_number, raw_row in enumerate(records, start=2):
            if self._validator.is_completely_empty_row(raw_row):
                skipped += 1
                continue

            mapped_row = self._mapper.map_row(raw_row=raw_row, resolution=resolution)
            if self._validator.extract_email(mapped_row) is None:
                skipped += 1
                continue

            total += 1
            parsed_row, row_errors = self._validator.validate_mapped_row(
                mapped_row=mapped_row,
                row_number=row_number,
                default_timestamp=imported_at,
            )
            if row_errors or parsed_row is None:
                failed += 1
                for error in row_errors:
                    self._record_error(captured_errors, error)
                continue

            try:
                with db.begin_nested():
                    created, donation_added = self._persist_row(
                        repository=repository,
                        row=parsed_row,
                        imported_at=imported_at,
                    )
            except (SQLAlchemyError, StoreError) as exc:
                failed += 1
                self._record_error(
                    captured_errors,
                    RowImportError(row_number=row_number, message=f"Could not save row: {exc}"),
                )
                continue

            successful += 1
            donors_created += int(created)
            donors_updated += int(not created)
            donations_created += int(donation_added)

            pending += 1
            if pending >= self._batch_size:
                self._commit(db)
                pending = 0

        self._commit(db)

        return ImportSummary(
            total=total,
            successful=successful,
            failed=failed,
            errors=captured_errors,
            skipped=skipped,
            donors_created=donors_created,
            donors_updated=donors_updated,
            donations_created=donations_created,
        )

    def _persist_row(
        self,
        *,
        repository: DonorRepository,
        row: ImportRow,
        imported_at: datetime,
    ) -> tuple[bool, bool]:
        donor, created = repository.upsert_by_email(row.donor, imported_at=imported_at)
        if row.amount is None:
            return created, False

        if row.external_donation_id and not created:
            existing = repository.find_donations_by_external_id(row.external_donation_id, donor_id=donor.id)
            if existing:
                # re-imports insert again; flagged, not deduplicated
                logger.warning(
                    "Possible duplicate donation row=%d donor_id=%s external_donation_id=%s existing=%d",
                    row.row_number,
                    donor.id,
                    row.external_donation_id,
                    len(existing),
                )

        repository.create_donation(
            DonationInput(
                amount=row.amount,
                timestamp=row.timestamp,
                email=donor.email,
                donor_id=donor.id,
                external_donation_id=row.external_donation_id,
                imported=True,
            )
        )
        return created, True

    def _commit(self, db: Session) -> None:
        try:
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise ImportPersistenceError("Failed to persist imported donor rows.") from exc

    def _record_error(self, captured_errors: list[str], error: RowImportError) -> None:
        if self._log_row_errors:
            logger.warning(
                "Import row error row=%s column=%s message=%s value=%r",
                error.row_number,
                error.column,
                error.message,
                error.value,
            )

        if len(captured_errors) < self._max_errors:
            captured_errors.append(error.describe())


# ---------------------------------------------------------------------------
# File readers
# ---------------------------------------------------------------------------


def read_import_frame(filename: str, content: bytes) -> pd.DataFrame:
    """
    Read an uploaded file into a DataFrame of raw cell values.
    """

    suffix = Path(filename or "").suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        allowed = ", ".join(sorted(SUPPORTED_EXTENSIONS))
        raise ImportHeaderError(f"Unsupported file type {suffix or '(none)'!r}. Allowed: {allowed}.")
    if not content:
        raise ImportHeaderError("Uploaded file is empty.")

    buffer = io.BytesIO(content)
    try:
        if suffix in EXCEL_EXTENSIONS:
            frame = pd.read_excel(buffer, sheet_name=0, dtype=object)
        elif suffix == ".csv":
            frame = pd.read_csv(buffer, dtype=str, keep_default_na=False, encoding="utf-8-sig")
        else:
            frame = _read_json_records(content)
    except ImportHeaderError:
        raise
    except ImportError as exc:
        raise ImportHeaderError(f"No reader available for {suffix} files: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise ImportHeaderError("File must be UTF-8 encoded.") from exc
    except (
        ValueError,
        pd.errors.ParserError,
        pd.errors.EmptyDataError,
        zipfile.BadZipFile,
        InvalidFileException,
    ) as exc:
        raise ImportHeaderError(f"Could not read {suffix} file: {exc}") from exc

    if frame.columns.empty:
        raise ImportHeaderError("File has no header row.")
    return frame


def _read_json_records(content: bytes) -> pd.DataFrame:
    payload = json.loads(content.decode("utf-8-sig"))
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        raise ImportHeaderError("JSON imports must be an array of objects.")
    return pd.DataFrame.from_records(payload)


def _frame_records(frame: pd.DataFrame) -> list[dict[str, Any]]:
    cleaned = frame.astype(object).where(pd.notna(frame), None)
    cleaned.columns = [str(column) for column in cleaned.columns]
    return cleaned.to_dict(orient="records")


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_donor_import_service() -> DonorImportService:
    """
    Build and cache the import service with env-driven settings.
    """
    settings = get_import_settings()
    return DonorImportService(
        batch_size=settings.batch_size,
        max_errors=settings.max_errors,
        log_row_errors=settings.log_row_errors,
    )
