"""
impact/storyteller.py

Narrative phrasing for impact slides.

Rewrites the short ``people_fed`` / ``days_fed`` fields and the animal and
vehicle comparison fields of a :class:`DonationImpact` into sentences sized
to the gift. Deterministic; the same impact always yields the same story.
"""

from __future__ import annotations

from dataclasses import replace

from impact.calculator import DonationImpact
from impact.comparisons import all_weight_comparisons, format_fixed, round_half_up, weight_comparison

AVERAGE_MEALS_PER_DAY = 3


def narrate(impact: DonationImpact) -> DonationImpact:
    """
    Return a copy of ``impact`` with narrative comparison fields.
    """

    changes: dict[str, str] = {}

    if impact.food_rescued > 0:
        lbs = impact.food_rescued
        changes["weight_comparison"] = weight_comparison(lbs)
        changes.update(all_weight_comparisons(lbs))
        changes["baby_elephants"] = f"{round_half_up(lbs / 200)} baby elephants"
        changes["cars"] = f"{format_fixed(lbs / 4_000, 1)} cars"
        changes["bison"] = _bison_phrase(lbs)

    if impact.meals_provided > 0:
        changes["people_fed"] = _people_fed_story(impact.people_served)
        changes["days_fed"] = _days_fed_story(impact.meals_provided, impact.people_served)

    return replace(impact, **changes) if changes else impact


def _bison_phrase(lbs: int) -> str:
    herd = round_half_up(lbs / 100)
    if lbs < 100:
        return "nearly one bison"
    if lbs < 500:
        return f"{herd} bison"
    if lbs < 1_000:
        return f"a group of {herd} bison roaming the plains"
    return f"a majestic herd of {herd} bison"


def _people_fed_story(people_served: int) -> str:
    if people_served < 10:
        return f"a family of {people_served}"
    if people_served < 50:
        return f"everyone at a small community gathering ({people_served} people)"
    if people_served < 200:
        return f"an entire school classroom for a month ({people_served} students)"
    return f"everyone in a small concert venue ({people_served} people)"


def _days_fed_story(meals: int, people_served: int) -> str:
    if people_served <= 0:
        return "a nutritious meal"

    days = round_half_up(meals / (people_served * AVERAGE_MEALS_PER_DAY))
    if days < 1:
        return "a nutritious meal"
    if days == 1:
        return "a full day of meals"
    if days < 7:
        return f"{days} days of meals"
    if days < 30:
        return f"{round_half_up(days / 7)} weeks of meals"
    return "over a month of meals"
