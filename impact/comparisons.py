"""
impact/comparisons.py

Weight comparisons that turn pounds of rescued food into something a donor
can picture.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

# (upper bound in lbs, reference weight in lbs, label, decimals)
# decimals=None renders a rounded whole count.
_WEIGHT_TIERS: tuple[tuple[float, int, str, int | None], ...] = (
    (20, 10, "large house cats (~10 lbs each)", None),
    (200, 70, "Golden Retrievers (~70 lbs each)", None),
    (1_000, 200, "baby elephants (~200 lbs each)", None),
    (3_000, 700, "grizzly bears (~700 lbs each)", None),
    (5_000, 3_000, "hippos (~3,000 lbs each)", None),
    (10_000, 4_000, "cars (~4,000 lbs each)", 1),
    (30_000, 24_000, "school buses (~24,000 lbs each)", 1),
)
_LARGEST_TIER: tuple[int, str, int] = (90_000, "small jets (~90,000 lbs each)", 2)


def round_half_up(value: float | Decimal) -> int:
    """
    Round to the nearest integer with halves going up.

    Matches the client-side counters: 2.5 meals displays as 3, not 2.
    """

    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_fixed(value: float, decimals: int) -> str:
    quantum = Decimal(1).scaleb(-decimals)
    return str(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _count(lbs: float, reference: int, decimals: int | None) -> str:
    if decimals is None:
        return str(round_half_up(lbs / reference))
    return format_fixed(lbs / reference, decimals)


def weight_comparison(lbs: float) -> str:
    """
    Pick the single most readable comparison for ``lbs`` pounds.
    """

    for upper, reference, label, decimals in _WEIGHT_TIERS:
        if lbs < upper:
            return f"{_count(lbs, reference, decimals)} {label}"
    reference, label, decimals = _LARGEST_TIER
    return f"{_count(lbs, reference, decimals)} {label}"


def all_weight_comparisons(lbs: float) -> dict[str, str]:
    """
    Every comparison regardless of size, keyed by impact field name.
    """

    return {
        "house_cats": f"{_count(lbs, 10, None)} large house cats",
        "golden_retrievers": f"{_count(lbs, 70, None)} Golden Retrievers",
        "grizzly_bears": f"{_count(lbs, 700, None)} grizzly bears",
        "hippos": f"{_count(lbs, 3_000, None)} hippos",
        "school_buses": f"{_count(lbs, 24_000, 1)} school buses",
        "small_jets": f"{_count(lbs, 90_000, 2)} small jets",
    }


def people_fed_phrase(meals: float) -> str:
    return "a person" if meals < 12 else "a family of 4"


def days_fed_phrase(meals: float) -> str:
    if meals < 12:
        return "a day"
    if meals < 84:
        return f"{int(meals // 12)} days"
    return f"{int(meals // 84)} weeks"
