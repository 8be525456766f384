"""
impact/calculator.py

Deterministic impact calculation engine.

Converts a donation amount (dollars) or a number of volunteer hours into a
fixed-shape impact record. Every metric is ``input * constant`` or a simple
ratio of other derived quantities; the constants come from an explicit
:class:`~impact.almanac.AlmanacData` argument.

Formulas
--------
Meals provided   = amount * meals_per_dollar
People served    = amount * meals_per_dollar * people_per_meal
People share (%) = people served / total_people_served * 100
Food rescued     = amount * food_rescue_per_dollar            (lbs)
CO2 saved        = food rescued * co2_per_pound_food
Water saved      = food rescued * water_per_pound_food        (gallons)

Volunteer meals  = hours * meals_per_hour
Cost savings     = hours * value_per_hour
People per day   = volunteer meals // meals_per_person_day
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any

from impact.almanac import (
    DEFAULT_ALMANAC,
    DEFAULT_VOLUNTEER_ALMANAC,
    AlmanacData,
    VolunteerAlmanac,
)
from impact.comparisons import (
    all_weight_comparisons,
    days_fed_phrase,
    format_fixed,
    people_fed_phrase,
    round_half_up,
    weight_comparison,
)

logger = logging.getLogger(__name__)


class InvalidImpactInputError(ValueError):
    """
    Raised when an amount or hours value is negative or not a finite number.
    """


# ---------------------------------------------------------------------------
# Output dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DonationImpact:
    """
    Impact statistics derived from one donation amount.

    Purely a value object: no identity, never persisted.
    """

    meals_provided: int
    people_served: int
    people_percentage: float
    food_rescued: int
    co2_saved: int
    water_saved: int
    produce_percentage: float
    dairy_percentage: float
    protein_percentage: float
    fresh_food_percentage: float
    baby_elephants: str
    bison: str
    cars: str
    people_fed: str
    days_fed: str
    weight_comparison: str
    house_cats: str
    golden_retrievers: str
    grizzly_bears: str
    hippos: str
    school_buses: str
    small_jets: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class VolunteerImpact:
    """
    Impact statistics derived from volunteer hours.
    """

    hours_worked: float
    meals_provided: int
    cost_savings: float
    people_served_per_day: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Calculators
# ---------------------------------------------------------------------------


def calculate_donation_impact(
    amount: float | int | Decimal,
    *,
    almanac: AlmanacData = DEFAULT_ALMANAC,
) -> DonationImpact:
    """
    Convert a donation amount in dollars into impact statistics.

    Parameters
    ----------
    amount:
        Non-negative donation amount.
    almanac:
        Conversion constants. Defaults to the FY2024 almanac.

    Raises
    ------
    InvalidImpactInputError
        For negative, NaN, infinite or non-numeric input.
    """

    value = _validate_quantity(amount, name="amount")

    meals_exact = value * almanac.meals_per_dollar
    people_exact = meals_exact * almanac.people_per_meal
    rescued_exact = value * almanac.food_rescue_per_dollar

    meals_provided = round_half_up(meals_exact)
    food_rescued = round_half_up(rescued_exact)
    people_percentage = (
        round(people_exact / almanac.total_people_served * 100, 2)
        if almanac.total_people_served
        else 0.0
    )
    distribution = almanac.food_distribution

    impact = DonationImpact(
        meals_provided=meals_provided,
        people_served=round_half_up(people_exact),
        people_percentage=people_percentage,
        food_rescued=food_rescued,
        co2_saved=round_half_up(rescued_exact * almanac.co2_per_pound_food),
        water_saved=round_half_up(rescued_exact * almanac.water_per_pound_food),
        produce_percentage=distribution.produce,
        dairy_percentage=distribution.dairy,
        protein_percentage=distribution.protein,
        fresh_food_percentage=round(distribution.fresh_food, 2),
        baby_elephants=format_fixed(rescued_exact / 200, 1),
        bison=format_fixed(rescued_exact / 2_000, 1),
        cars=format_fixed(rescued_exact / 4_000, 1),
        people_fed=people_fed_phrase(meals_provided),
        days_fed=days_fed_phrase(meals_provided),
        weight_comparison=weight_comparison(food_rescued),
        **all_weight_comparisons(food_rescued),
    )
    logger.debug("Donation impact computed amount=%.2f meals=%d", value, meals_provided)
    return impact


def calculate_volunteer_impact(
    hours: float | int | Decimal,
    *,
    almanac: VolunteerAlmanac = DEFAULT_VOLUNTEER_ALMANAC,
) -> VolunteerImpact:
    """
    Convert volunteer hours into impact statistics.
    """

    value = _validate_quantity(hours, name="hours")
    meals_provided = round_half_up(value * almanac.meals_per_hour)
    per_day = max(1, almanac.meals_per_person_day)

    return VolunteerImpact(
        hours_worked=value,
        meals_provided=meals_provided,
        cost_savings=round(value * almanac.value_per_hour, 2),
        people_served_per_day=meals_provided // per_day,
    )


def _validate_quantity(raw: Any, *, name: str) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float, Decimal)):
        raise InvalidImpactInputError(f"{name} must be a number, got {type(raw).__name__}.")

    value = float(raw)
    if math.isnan(value) or math.isinf(value):
        raise InvalidImpactInputError(f"{name} must be a finite number.")
    if value < 0:
        raise InvalidImpactInputError(f"{name} must not be negative.")
    return value
