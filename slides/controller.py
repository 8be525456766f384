"""
slides/controller.py

Pure transition functions for the impact slideshow.

    WELCOME --start_loading--> LOADING --complete_loading--> first content slide
                                       --fail_loading-----> first generic slide (+ error)

    content: first <-previous/next-> ... <-previous/next-> last

Every function takes a :class:`SlideState` and returns a new one; nothing
here touches I/O or rendering. ``next_slide`` on the last slide and
``previous_slide`` on the first content slide return the state unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal, InvalidOperation

from impact.calculator import DonationImpact, VolunteerImpact
from slides.state import (
    DONOR_SEQUENCE,
    GENERIC_DONATION_SEQUENCE,
    DonorContext,
    SlideName,
    SlideSequence,
    SlideState,
)

logger = logging.getLogger(__name__)


class SlideTransitionError(RuntimeError):
    """
    Raised when a transition is requested from a state that cannot take it.
    """


def initial_state(sequence: SlideSequence = GENERIC_DONATION_SEQUENCE) -> SlideState:
    return SlideState(sequence=sequence)


def start_loading(
    state: SlideState,
    amount: Decimal | float | int,
    *,
    donor_email: str | None = None,
) -> SlideState:
    """
    Submit an amount (dollars or hours) and enter the loading state.
    """

    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation as exc:
        raise SlideTransitionError(f"Amount must be a number, got {amount!r}.") from exc
    if not value.is_finite():
        raise SlideTransitionError("Amount must be a finite number.")
    if value < 0:
        raise SlideTransitionError("Amount must not be negative.")

    return replace(
        state,
        current=SlideName.LOADING,
        amount=value,
        donor_email=(donor_email or "").strip() or state.donor_email,
        is_loading=True,
        error=None,
    )


def complete_loading(
    state: SlideState,
    impact: DonationImpact | VolunteerImpact,
    *,
    donor: DonorContext | None = None,
    sequence: SlideSequence | None = None,
) -> SlideState:
    """
    Leave the loading state for the first content slide.

    A donation page with a donor context switches to the donor sequence
    unless ``sequence`` is given explicitly.
    """

    _require_loading(state, "complete_loading")
    page = _page_sequence(state.sequence)
    if sequence is None and donor is not None and page is GENERIC_DONATION_SEQUENCE:
        sequence = DONOR_SEQUENCE
    target = sequence or page
    return replace(
        state,
        sequence=target,
        current=target.first,
        donor=donor,
        impact=impact,
        is_loading=False,
    )


def fail_loading(
    state: SlideState,
    message: str,
    impact: DonationImpact | VolunteerImpact | None,
    *,
    fallback: SlideSequence | None = None,
) -> SlideState:
    """
    Leave the loading state after a failed fetch.

    The donor still lands on the generic, non-personalised slides with the
    error attached for display. Volunteer pages keep their own sequence.
    """

    _require_loading(state, "fail_loading")
    fallback = fallback or _page_sequence(state.sequence)
    logger.info("Slide loading degraded to %s sequence: %s", fallback.name, message)
    return replace(
        state,
        sequence=fallback,
        current=fallback.first,
        donor=None,
        impact=impact,
        error=message,
        is_loading=False,
    )


def next_slide(state: SlideState) -> SlideState:
    index = state.sequence.index_of(state.current)
    if index is None or index >= len(state.sequence.slides) - 1:
        return state
    return replace(state, current=state.sequence.slides[index + 1])


def previous_slide(state: SlideState) -> SlideState:
    index = state.sequence.index_of(state.current)
    if index is None or index == 0:
        return state
    return replace(state, current=state.sequence.slides[index - 1])


def go_to(state: SlideState, slide: SlideName) -> SlideState:
    """
    Jump to a named content slide of the current sequence.
    """

    if state.sequence.index_of(slide) is None:
        raise SlideTransitionError(
            f"Slide {slide.value!r} is not part of the {state.sequence.name!r} sequence."
        )
    return replace(state, current=slide)


def dismiss_error(state: SlideState) -> SlideState:
    return replace(state, error=None) if state.error else state


def reset(state: SlideState, *, sequence: SlideSequence | None = None) -> SlideState:
    return initial_state(sequence or _page_sequence(state.sequence))


def is_first_slide(state: SlideState) -> bool:
    return state.current == state.sequence.first


def is_last_slide(state: SlideState) -> bool:
    return state.current == state.sequence.last


def _page_sequence(sequence: SlideSequence) -> SlideSequence:
    # donor slides are a personalised view of the donation page
    return GENERIC_DONATION_SEQUENCE if sequence is DONOR_SEQUENCE else sequence


def _require_loading(state: SlideState, transition: str) -> None:
    if state.current is not SlideName.LOADING:
        raise SlideTransitionError(
            f"{transition} requires the loading state, current state is {state.current.value!r}."
        )
