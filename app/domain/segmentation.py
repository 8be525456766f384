"""
app/domain/segmentation.py

Domain models for ad-hoc donor segments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class DonationFrequency(str, Enum):
    ALL = "all"
    SINGLE = "single"
    MULTIPLE = "multiple"


class DateRange(str, Enum):
    ALL = "all"
    LAST_YEAR = "lastYear"
    LAST_QUARTER = "lastQuarter"


@dataclass(frozen=True)
class SegmentCriteria:
    name: str | None = None
    donation_min: Decimal | None = None
    donation_max: Decimal | None = None
    donation_frequency: DonationFrequency = DonationFrequency.ALL
    date_range: DateRange = DateRange.ALL
    include_no_email: bool = False


@dataclass(frozen=True)
class SegmentResult:
    id: str
    name: str
    donor_count: int
    criteria: list[str] = field(default_factory=list)
