"""
app/mappers/donor_column_mapper.py

Header resolution for donor spreadsheets.

CRM exports name the same column many ways ("Email", "Email Address",
"email_address"). Headers are normalised, then matched exactly, then through
an alias table, then fuzzily.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import Any, Mapping, Sequence

from app.validators.mapping_validator import ColumnMappingError, MappingErrorDetail, MappingValidator

IMPORT_FIELDS: tuple[str, ...] = (
    "email",
    "first_name",
    "last_name",
    "phone",
    "external_id",
    "amount",
    "date",
    "external_donation_id",
)

REQUIRED_IMPORT_FIELDS: tuple[str, ...] = ("email",)

DEFAULT_COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "email": ("email", "email address", "e-mail", "email_address"),
    "first_name": ("first name", "firstname", "first", "given name"),
    "last_name": ("last name", "lastname", "last", "surname", "family name"),
    "phone": ("phone number", "phone_number", "telephone", "mobile"),
    "external_id": ("external id", "id", "donor id", "constituent id"),
    "amount": ("donation amount", "donation_amount", "value", "gift amount"),
    "date": ("donation date", "donation_date", "timestamp", "gift date"),
    "external_donation_id": ("donation id", "donation_id", "external donation id", "gift id"),
}

# Names shorter than this match exactly only, never by substring.
_MIN_CONTAINMENT_LENGTH = 4

# Score given to a header that ends with a whole field name or alias.
_CONTAINMENT_SCORE = 0.95


def normalize_header(header: str) -> str:
    """
    Normalize a column name for flexible matching.
    """

    return "".join(ch for ch in header.strip().lower() if ch.isalnum())


@dataclass(frozen=True)
class ColumnResolution:
    """
    Final resolved mapping metadata.
    """

    field_to_source: dict[str, str]
    source_headers: tuple[str, ...]
    match_strategies: dict[str, str]

    @property
    def has_donation_columns(self) -> bool:
        return "amount" in self.field_to_source


class DonorColumnMapper:
    """
    Resolves spreadsheet headers into donor import fields.
    """

    def __init__(
        self,
        *,
        aliases: Mapping[str, Sequence[str]] | None = None,
        validator: MappingValidator | None = None,
        fuzzy_threshold: float = 0.9,
    ) -> None:
        self._aliases: dict[str, tuple[str, ...]] = {
            field: tuple(values) for field, values in (aliases or DEFAULT_COLUMN_ALIASES).items()
        }
        self._validator = validator or MappingValidator(
            required_fields=REQUIRED_IMPORT_FIELDS,
            known_fields=IMPORT_FIELDS,
        )
        self._fuzzy_threshold = max(0.0, min(1.0, fuzzy_threshold))

    def resolve(self, headers: Sequence[Any]) -> ColumnResolution:
        """
        Resolve import fields from headers.

        Exact and alias matches are claimed for every field before any fuzzy
        matching runs, so a fuzzy guess never steals a column another field
        names exactly.
        """

        source_headers = tuple(str(header) for header in headers if header is not None and str(header).strip())
        if not source_headers:
            raise ColumnMappingError(
                message="File headers are empty; cannot resolve columns.",
                errors=[MappingErrorDetail(code="empty_headers", message="No headers were found.")],
            )

        normalized_lookup: dict[str, str] = {}
        for header in source_headers:
            key = normalize_header(header)
            if key and key not in normalized_lookup:
                normalized_lookup[key] = header

        resolved: dict[str, str] = {}
        strategies: dict[str, str] = {}
        used_headers: set[str] = set()

        for field in IMPORT_FIELDS:
            match = self._find_exact_or_alias_match(field=field, normalized_lookup=normalized_lookup)
            if match is not None and match not in used_headers:
                resolved[field] = match
                strategies[field] = "exact_or_alias"
                used_headers.add(match)

        for field in IMPORT_FIELDS:
            if field in resolved:
                continue
            match = self._find_best_fuzzy_match(
                field=field,
                normalized_lookup=normalized_lookup,
                used_headers=used_headers,
            )
            if match is not None:
                resolved[field] = match
                strategies[field] = "fuzzy"
                used_headers.add(match)

        self._validator.validate(mapping=resolved, source_headers=source_headers)
        return ColumnResolution(
            field_to_source=resolved,
            source_headers=source_headers,
            match_strategies=strategies,
        )

    def map_row(
        self,
        *,
        raw_row: Mapping[str, Any],
        resolution: ColumnResolution,
    ) -> dict[str, Any]:
        """
        Map one source row into import field values.
        """

        return {
            field: raw_row.get(source_column)
            for field, source_column in resolution.field_to_source.items()
        }

    def _find_exact_or_alias_match(
        self,
        *,
        field: str,
        normalized_lookup: Mapping[str, str],
    ) -> str | None:
        for candidate in (field, *self._aliases.get(field, ())):
            match = normalized_lookup.get(normalize_header(candidate))
            if match:
                return match
        return None

    def _find_best_fuzzy_match(
        self,
        *,
        field: str,
        normalized_lookup: Mapping[str, str],
        used_headers: set[str],
    ) -> str | None:
        candidates = [
            normalize_header(item)
            for item in (field, *self._aliases.get(field, ()))
            if normalize_header(item)
        ]

        best_header: str | None = None
        best_score = 0.0
        for header_norm, header_raw in normalized_lookup.items():
            if header_raw in used_headers:
                continue
            for candidate in candidates:
                score = SequenceMatcher(None, header_norm, candidate).ratio()
                if _contains_whole_name(header_norm, candidate):
                    score = max(score, _CONTAINMENT_SCORE)
                if score > best_score:
                    best_score = score
                    best_header = header_raw

        if best_header is not None and best_score >= self._fuzzy_threshold:
            return best_header
        return None


def _contains_whole_name(header_norm: str, candidate: str) -> bool:
    """
    True when ``header_norm`` ends with ``candidate`` ("primaryemail"), or
    starts with it followed only by digits ("email2").

    "dateofbirth" does not contain "date" by this rule.
    """

    if len(candidate) < _MIN_CONTAINMENT_LENGTH or header_norm == candidate:
        return False
    if header_norm.endswith(candidate):
        return True
    return header_norm.startswith(candidate) and header_norm[len(candidate):].isdigit()
