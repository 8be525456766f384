"""
slides/loader.py

The loading step between the welcome form and the first content slide.

Computes the impact for the submitted amount and, when an email was given,
fetches the donor's history. A donor that does not exist simply gets the
generic slides. A fetch that fails also gets the generic slides, with the
failure message attached to the state so the page can show it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal

from impact.calculator import DonationImpact, VolunteerImpact
from impact.fiscal import resolve_impact_amount
from slides.controller import complete_loading, fail_loading
from slides.state import DonorContext, SlideName, SlideState

logger = logging.getLogger(__name__)

DonorFetcher = Callable[[str], DonorContext | None]
ImpactCalculator = Callable[[Decimal], DonationImpact | VolunteerImpact]

DONOR_FETCH_FAILED_MESSAGE = "We couldn't load your giving history, so here's the impact of your gift."


def run_loading_step(
    state: SlideState,
    *,
    fetch_donor: DonorFetcher | None,
    calculate: ImpactCalculator,
) -> SlideState:
    """
    Resolve a LOADING state into the first content slide.

    ``fetch_donor`` may be ``None`` for pages that never personalise
    (volunteer page). Any exception it raises is treated as a fetch failure.
    Errors from ``calculate`` propagate.
    """

    if state.current is not SlideName.LOADING:
        return state

    donor: DonorContext | None = None
    fetch_error: str | None = None

    if fetch_donor is not None and state.donor_email:
        try:
            donor = fetch_donor(state.donor_email)
        except Exception as exc:
            logger.warning("Donor fetch failed email=%s: %s", state.donor_email, exc)
            fetch_error = DONOR_FETCH_FAILED_MESSAGE
        else:
            if donor is None:
                logger.info("No donor record for email=%s, using generic slides", state.donor_email)

    amount = state.amount
    if donor is not None and amount <= 0:
        amount = resolve_impact_amount(donor.giving)

    impact = calculate(amount)

    if fetch_error is not None:
        return fail_loading(state, fetch_error, impact)
    return complete_loading(state, impact, donor=donor)
