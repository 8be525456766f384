from __future__ import annotations

from dataclasses import replace

import pytest

from impact.calculator import calculate_donation_impact
from impact.storyteller import narrate


def test_narrate_hundred_dollar_gift() -> None:
    story = narrate(calculate_donation_impact(100))

    assert story.people_fed == "everyone at a small community gathering (27 people)"
    assert story.days_fed == "a full day of meals"
    assert story.bison == "nearly one bison"
    assert story.baby_elephants == "0 baby elephants"
    assert story.weight_comparison == "1 Golden Retrievers (~70 lbs each)"
    assert story.cars == "0.0 cars"
    assert story.house_cats == "4 large house cats"


def test_narrate_keeps_numeric_fields() -> None:
    impact = calculate_donation_impact(100)
    story = narrate(impact)

    assert story.meals_provided == impact.meals_provided
    assert story.food_rescued == impact.food_rescued
    assert story.house_cats == impact.house_cats


def test_narrate_zero_gift_is_unchanged() -> None:
    impact = calculate_donation_impact(0)

    assert narrate(impact) is impact


@pytest.mark.parametrize(
    ("lbs", "expected"),
    [
        (99, "nearly one bison"),
        (250, "3 bison"),
        (600, "a group of 6 bison roaming the plains"),
        (1_500, "a majestic herd of 15 bison"),
    ],
)
def test_bison_phrase_scales_with_weight(lbs: int, expected: str) -> None:
    impact = replace(calculate_donation_impact(0), food_rescued=lbs)

    assert narrate(impact).bison == expected


@pytest.mark.parametrize(
    ("people", "expected"),
    [
        (4, "a family of 4"),
        (30, "everyone at a small community gathering (30 people)"),
        (120, "an entire school classroom for a month (120 students)"),
        (500, "everyone in a small concert venue (500 people)"),
    ],
)
def test_people_fed_story(people: int, expected: str) -> None:
    impact = replace(calculate_donation_impact(0), meals_provided=people * 3, people_served=people)

    assert narrate(impact).people_fed == expected


@pytest.mark.parametrize(
    ("meals", "people", "expected"),
    [
        (1, 10, "a nutritious meal"),
        (30, 10, "a full day of meals"),
        (90, 10, "3 days of meals"),
        (420, 10, "2 weeks of meals"),
        (1_200, 10, "over a month of meals"),
    ],
)
def test_days_fed_story(meals: int, people: int, expected: str) -> None:
    impact = replace(calculate_donation_impact(0), meals_provided=meals, people_served=people)

    assert narrate(impact).days_fed == expected


def test_narrate_labels_vehicle_counts() -> None:
    impact = replace(calculate_donation_impact(0), food_rescued=6_000, meals_provided=1, people_served=1)

    story = narrate(impact)

    assert story.cars == "1.5 cars"
    assert story.school_buses == "0.3 school buses"
    assert story.small_jets == "0.07 small jets"
    assert story.hippos == "2 hippos"
