"""
impact/almanac.py

Per-unit constants used to convert money and volunteer time into impact.

Values come from the FY2024 annual almanac (10.95M meals distributed at a
$25.88M value, 60,000 people served through partner agencies). They are
immutable data objects, passed explicitly into the calculators so tests and
alternate campaigns can supply their own tables.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class FoodDistribution:
    """
    Share of distributed food by category, in percent.
    """

    produce: float = 31.92
    dairy: float = 21.67
    protein: float = 18.33

    @property
    def fresh_food(self) -> float:
        return self.produce + self.dairy + self.protein


@dataclass(frozen=True)
class AlmanacData:
    """
    Donation-side conversion constants.
    """

    meals_per_dollar: float = 0.833
    """~$2.36 per meal: 10.95M meals at a $25.88M distributed value."""

    people_per_meal: float = 0.328
    """60,000 people served with ~11M meals annually."""

    food_rescue_per_dollar: float = 0.421
    """Pounds of food rescued per dollar (estimate)."""

    co2_per_pound_food: float = 0.84
    """CO2 emissions prevented per pound of rescued food."""

    water_per_pound_food: float = 45.2
    """Gallons of water saved per pound of rescued food."""

    food_distribution: FoodDistribution = field(default_factory=FoodDistribution)

    total_meals_provided: int = 10_951_888
    total_people_served: int = 60_000

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["food_distribution"]["fresh_food"] = self.food_distribution.fresh_food
        return payload


@dataclass(frozen=True)
class VolunteerAlmanac:
    """
    Volunteer-side conversion constants.
    """

    meals_per_hour: float = 25.0
    """Meals packed or sorted per volunteer hour on a warehouse shift."""

    value_per_hour: float = 33.49
    """Estimated dollar value of one volunteer hour."""

    meals_per_person_day: int = 3


DEFAULT_ALMANAC = AlmanacData()
DEFAULT_VOLUNTEER_ALMANAC = VolunteerAlmanac()
