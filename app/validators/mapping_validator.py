"""
app/validators/mapping_validator.py

Validation for spreadsheet column mapping resolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence


@dataclass(frozen=True)
class MappingErrorDetail:
    """
    Structured mapping error detail.
    """

    code: str
    message: str
    field: str | None = None
    source_column: str | None = None
    context: dict[str, Any] | None = None


class ColumnMappingError(ValueError):
    """
    Raised when spreadsheet headers cannot be mapped to import fields.
    """

    def __init__(self, *, message: str, errors: Sequence[MappingErrorDetail]) -> None:
        super().__init__(message)
        self.message = message
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "errors": [
                {
                    "code": error.code,
                    "message": error.message,
                    "field": error.field,
                    "source_column": error.source_column,
                    "context": error.context,
                }
                for error in self.errors
            ],
        }


class MappingValidator:
    """
    Validates resolved field-to-column mappings.
    """

    def __init__(
        self,
        *,
        required_fields: Sequence[str],
        known_fields: Sequence[str],
    ) -> None:
        self._required_fields = tuple(required_fields)
        self._known_fields = set(known_fields)

    def validate(
        self,
        *,
        mapping: dict[str, str],
        source_headers: Sequence[str],
    ) -> None:
        """
        Validate mapping and raise structured errors if invalid.
        """

        errors: list[MappingErrorDetail] = []
        headers_set = set(source_headers)

        for field, source_column in mapping.items():
            if field not in self._known_fields:
                errors.append(
                    MappingErrorDetail(
                        code="unknown_field",
                        message="Unknown import field in mapping.",
                        field=field,
                        source_column=source_column,
                    )
                )
            if source_column not in headers_set:
                errors.append(
                    MappingErrorDetail(
                        code="unknown_source_column",
                        message="Mapped column does not exist in the file headers.",
                        field=field,
                        source_column=source_column,
                    )
                )

        claimed: dict[str, str] = {}
        for field, source_column in mapping.items():
            owner = claimed.setdefault(source_column, field)
            if owner != field:
                errors.append(
                    MappingErrorDetail(
                        code="duplicate_source_column",
                        message=f"Column is already mapped to {owner!r}.",
                        field=field,
                        source_column=source_column,
                    )
                )

        for required in self._required_fields:
            if required not in mapping:
                errors.append(
                    MappingErrorDetail(
                        code="required_field_unmapped",
                        message="Required column is missing.",
                        field=required,
                        context={"source_headers": list(source_headers)},
                    )
                )

        if errors:
            missing = sorted(
                {
                    error.field
                    for error in errors
                    if error.code == "required_field_unmapped" and error.field
                }
            )
            raise ColumnMappingError(
                message=f"Column mapping failed. Missing required columns: {', '.join(missing) or 'none'}.",
                errors=errors,
            )
