"""
tests/test_fiscal_year.py

Fiscal-year bucketing (July 1 - June 30) and donor giving summaries.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from impact.fiscal import (
    GivingSummary,
    consecutive_fiscal_years,
    filter_by_fiscal_year,
    fiscal_year_bounds,
    fiscal_year_for,
    fiscal_year_label,
    giving_by_fiscal_year,
    resolve_impact_amount,
    summarize_giving,
)


@dataclass
class Gift:
    amount: Decimal
    timestamp: datetime


def _gift(amount: str, year: int, month: int, day: int) -> Gift:
    return Gift(amount=Decimal(amount), timestamp=datetime(year, month, day, tzinfo=timezone.utc))


# ---------------------------------------------------------------------------
# Fiscal year boundaries
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("moment", "expected"),
    [
        (date(2024, 6, 30), 2024),
        (date(2024, 7, 1), 2025),
        (datetime(2025, 1, 15, 12, 0), 2025),
        (date(2023, 12, 31), 2024),
    ],
)
def test_fiscal_year_for(moment, expected: int) -> None:
    assert fiscal_year_for(moment) == expected


def test_fiscal_year_label_and_bounds() -> None:
    assert fiscal_year_label(2024) == "FY24"
    assert fiscal_year_label(2009) == "FY09"
    assert fiscal_year_bounds(2025) == (date(2024, 7, 1), date(2025, 6, 30))


def test_giving_by_fiscal_year_sums_and_orders() -> None:
    gifts = [
        _gift("50", 2024, 8, 1),
        _gift("25", 2023, 7, 1),
        _gift("25", 2025, 2, 1),
    ]

    assert giving_by_fiscal_year(gifts) == {2024: Decimal("25"), 2025: Decimal("75")}
    assert filter_by_fiscal_year(gifts, 2024) == [gifts[1]]


@pytest.mark.parametrize(
    ("years", "expected"),
    [
        ([], 0),
        ([2024], 1),
        ([2023, 2024, 2025], 3),
        ([2021, 2023, 2024], 2),
        ([2025, 2025, 2024], 2),
    ],
)
def test_consecutive_fiscal_years(years: list[int], expected: int) -> None:
    assert consecutive_fiscal_years(years) == expected


# ---------------------------------------------------------------------------
# Giving summary
# ---------------------------------------------------------------------------


def test_summarize_giving_orders_by_date() -> None:
    gifts = [
        _gift("250", 2024, 12, 1),
        _gift("100", 2023, 11, 20),
        _gift("150", 2025, 8, 15),
    ]

    summary = summarize_giving(gifts)

    assert summary.lifetime_giving == Decimal("500")
    assert summary.total_gifts == 3
    assert summary.first_gift_date == gifts[1].timestamp
    assert summary.last_gift_date == gifts[2].timestamp
    assert summary.last_gift_amount == Decimal("150")
    assert summary.largest_gift_amount == Decimal("250")
    assert summary.largest_gift_date == gifts[0].timestamp
    assert summary.consecutive_years_giving == 3
    assert summary.giving_by_fiscal_year == {
        "FY24": Decimal("100"),
        "FY25": Decimal("250"),
        "FY26": Decimal("150"),
    }
    assert summary.has_history


def test_summarize_giving_empty_history() -> None:
    summary = summarize_giving([])

    assert summary == GivingSummary()
    assert not summary.has_history


def test_largest_gift_tie_keeps_earliest() -> None:
    gifts = [_gift("100", 2025, 1, 1), _gift("100", 2024, 1, 1)]

    assert summarize_giving(gifts).largest_gift_date == gifts[1].timestamp


# ---------------------------------------------------------------------------
# Impact amount for returning donors
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("summary", "expected"),
    [
        (None, Decimal("100.00")),
        (GivingSummary(), Decimal("100.00")),
        (GivingSummary(lifetime_giving=Decimal("500"), total_gifts=3, last_gift_amount=Decimal("250")), Decimal("250.00")),
        (GivingSummary(lifetime_giving=Decimal("300"), total_gifts=3), Decimal("100.00")),
        (GivingSummary(lifetime_giving=Decimal("2000")), Decimal("200.00")),
        (GivingSummary(lifetime_giving=Decimal("100")), Decimal("50.00")),
        (GivingSummary(lifetime_giving=Decimal("20000")), Decimal("1000.00")),
    ],
)
def test_resolve_impact_amount(summary: GivingSummary | None, expected: Decimal) -> None:
    assert resolve_impact_amount(summary) == expected
