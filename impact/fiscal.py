"""
impact/fiscal.py

Fiscal-year bucketing and "wrapped" giving statistics.

The fiscal year runs July 1 through June 30 and is named by the calendar
year it ends in: a gift on 2024-06-30 belongs to FY2024, a gift on
2024-07-01 belongs to FY2025. Everything here is computed at read time from
donation history; nothing is stored.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Protocol

FISCAL_YEAR_START_MONTH = 7

DEFAULT_IMPACT_AMOUNT = Decimal("100")
_ESTIMATE_SHARE = Decimal("0.1")
_ESTIMATE_FLOOR = Decimal("50")
_ESTIMATE_CEILING = Decimal("1000")


class GiftRecord(Protocol):
    """
    Anything with an amount and a timestamp (ORM donation rows, DTOs).
    """

    amount: Decimal | float
    timestamp: datetime | date


def fiscal_year_for(moment: date | datetime) -> int:
    """
    Return the fiscal year ``moment`` falls in.
    """

    return moment.year + 1 if moment.month >= FISCAL_YEAR_START_MONTH else moment.year


def fiscal_year_label(fiscal_year: int) -> str:
    """
    Short label used in donor payloads, e.g. ``FY24``.
    """

    return f"FY{fiscal_year % 100:02d}"


def fiscal_year_bounds(fiscal_year: int) -> tuple[date, date]:
    """
    First and last calendar day of ``fiscal_year`` (both inclusive).
    """

    return date(fiscal_year - 1, FISCAL_YEAR_START_MONTH, 1), date(fiscal_year, 6, 30)


def filter_by_fiscal_year(gifts: Iterable[GiftRecord], fiscal_year: int) -> list[GiftRecord]:
    return [gift for gift in gifts if fiscal_year_for(gift.timestamp) == fiscal_year]


def giving_by_fiscal_year(gifts: Iterable[GiftRecord]) -> dict[int, Decimal]:
    """
    Sum gift amounts per fiscal year, ordered by year.
    """

    totals: dict[int, Decimal] = defaultdict(Decimal)
    for gift in gifts:
        totals[fiscal_year_for(gift.timestamp)] += _as_decimal(gift.amount)
    return dict(sorted(totals.items()))


def consecutive_fiscal_years(years: Iterable[int]) -> int:
    """
    Length of the unbroken run of fiscal years ending at the latest one.
    """

    ordered = sorted(set(years), reverse=True)
    if not ordered:
        return 0

    streak = 1
    for previous, current in zip(ordered, ordered[1:]):
        if previous - current != 1:
            break
        streak += 1
    return streak


@dataclass(frozen=True)
class GivingSummary:
    """
    Lifetime statistics for one donor's gift history.
    """

    lifetime_giving: Decimal = Decimal("0")
    total_gifts: int = 0
    first_gift_date: datetime | date | None = None
    last_gift_date: datetime | date | None = None
    last_gift_amount: Decimal | None = None
    largest_gift_amount: Decimal | None = None
    largest_gift_date: datetime | date | None = None
    consecutive_years_giving: int = 0
    giving_by_fiscal_year: dict[str, Decimal] = field(default_factory=dict)

    @property
    def has_history(self) -> bool:
        return self.total_gifts > 0


def summarize_giving(gifts: Iterable[GiftRecord]) -> GivingSummary:
    """
    Build a :class:`GivingSummary` from any gift iterable, in any order.
    """

    ordered = sorted(gifts, key=lambda gift: _sort_key(gift.timestamp))
    if not ordered:
        return GivingSummary()

    first, last = ordered[0], ordered[-1]
    # max() keeps the earliest gift on ties
    largest = max(ordered, key=lambda gift: _as_decimal(gift.amount))
    by_year = giving_by_fiscal_year(ordered)

    return GivingSummary(
        lifetime_giving=sum((_as_decimal(gift.amount) for gift in ordered), Decimal("0")),
        total_gifts=len(ordered),
        first_gift_date=first.timestamp,
        last_gift_date=last.timestamp,
        last_gift_amount=_as_decimal(last.amount),
        largest_gift_amount=_as_decimal(largest.amount),
        largest_gift_date=largest.timestamp,
        consecutive_years_giving=consecutive_fiscal_years(
            year for year, total in by_year.items() if total > 0
        ),
        giving_by_fiscal_year={fiscal_year_label(year): total for year, total in by_year.items()},
    )


def resolve_impact_amount(summary: GivingSummary | None) -> Decimal:
    """
    Choose the amount a returning donor's impact slides are based on.

    Last gift first, then the average gift, then a tenth of lifetime giving
    clamped to $50-$1000, then a flat $100.
    """

    if summary is None:
        return DEFAULT_IMPACT_AMOUNT

    if summary.last_gift_amount is not None and summary.last_gift_amount > 0:
        amount = summary.last_gift_amount
    elif summary.lifetime_giving > 0 and summary.total_gifts > 0:
        amount = summary.lifetime_giving / summary.total_gifts
    elif summary.lifetime_giving > 0:
        amount = summary.lifetime_giving * _ESTIMATE_SHARE
        amount = max(_ESTIMATE_FLOOR, min(amount, _ESTIMATE_CEILING))
    else:
        amount = DEFAULT_IMPACT_AMOUNT

    return amount.quantize(Decimal("0.01"))


def _as_decimal(value: Decimal | float | int | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _sort_key(moment: datetime | date) -> datetime:
    if isinstance(moment, datetime):
        return moment.replace(tzinfo=None)
    return datetime(moment.year, moment.month, moment.day)
