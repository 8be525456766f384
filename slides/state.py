"""
slides/state.py

Slide names, page sequences and the immutable slide state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from impact.calculator import DonationImpact, VolunteerImpact
from impact.fiscal import GivingSummary


class SlideName(str, Enum):
    WELCOME = "welcome"
    LOADING = "loading"

    # donation pages
    DONOR_SUMMARY = "donor_summary"
    MEALS = "meals"
    NUTRITION = "nutrition"
    TIME_GIVING = "time_giving"
    PEOPLE = "people"
    ENVIRONMENT = "environment"
    FOOD_RESCUE = "food_rescue"
    VOLUNTEER = "volunteer"
    PARTNER = "partner"
    SUMMARY = "summary"

    # volunteer page
    VOLUNTEER_SUMMARY = "volunteer_summary"
    COST_SAVINGS = "cost_savings"
    PEOPLE_SERVED = "people_served"
    THANK_YOU = "thank_you"


# States every page passes through before any content slide.
PRELUDE: tuple[SlideName, ...] = (SlideName.WELCOME, SlideName.LOADING)


@dataclass(frozen=True)
class SlideSequence:
    """
    Ordered content slides for one page.
    """

    name: str
    slides: tuple[SlideName, ...]

    def __post_init__(self) -> None:
        if not self.slides:
            raise ValueError(f"Slide sequence {self.name!r} has no content slides.")
        if any(slide in PRELUDE for slide in self.slides):
            raise ValueError(f"Slide sequence {self.name!r} must not contain welcome/loading states.")
        if len(set(self.slides)) != len(self.slides):
            raise ValueError(f"Slide sequence {self.name!r} repeats a slide.")

    @property
    def first(self) -> SlideName:
        return self.slides[0]

    @property
    def last(self) -> SlideName:
        return self.slides[-1]

    def index_of(self, slide: SlideName) -> int | None:
        try:
            return self.slides.index(slide)
        except ValueError:
            return None


GENERIC_DONATION_SEQUENCE = SlideSequence(
    name="donation",
    slides=(
        SlideName.MEALS,
        SlideName.NUTRITION,
        SlideName.PEOPLE,
        SlideName.ENVIRONMENT,
        SlideName.FOOD_RESCUE,
        SlideName.VOLUNTEER,
        SlideName.PARTNER,
        SlideName.SUMMARY,
    ),
)

DONOR_SEQUENCE = SlideSequence(
    name="donor",
    slides=(
        SlideName.DONOR_SUMMARY,
        SlideName.MEALS,
        SlideName.PEOPLE,
        SlideName.TIME_GIVING,
        SlideName.FOOD_RESCUE,
        SlideName.ENVIRONMENT,
        SlideName.VOLUNTEER,
        SlideName.SUMMARY,
    ),
)

VOLUNTEER_SEQUENCE = SlideSequence(
    name="volunteer",
    slides=(
        SlideName.VOLUNTEER_SUMMARY,
        SlideName.MEALS,
        SlideName.COST_SAVINGS,
        SlideName.PEOPLE_SERVED,
        SlideName.THANK_YOU,
    ),
)


@dataclass(frozen=True)
class DonorContext:
    """
    Personalisation data for a returning donor, carried in slide state.
    """

    email: str
    first_name: str | None = None
    giving: GivingSummary = field(default_factory=GivingSummary)


@dataclass(frozen=True)
class SlideState:
    """
    Complete, immutable state of one slideshow.

    ``sequence`` is the page's content sequence while browsing. Entering the
    loading state may swap it (donor vs. generic) depending on what the
    loading step found.
    """

    sequence: SlideSequence
    current: SlideName = SlideName.WELCOME
    amount: Decimal = Decimal("0")
    donor_email: str | None = None
    donor: DonorContext | None = None
    impact: DonationImpact | VolunteerImpact | None = None
    error: str | None = None
    is_loading: bool = False

    @property
    def in_content(self) -> bool:
        return self.sequence.index_of(self.current) is not None
