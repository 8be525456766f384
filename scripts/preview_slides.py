"""
Walk the impact slideshow from the terminal against a running API.

    python -m scripts.preview_slides 100 --email jane@example.org
    python -m scripts.preview_slides 4 --volunteer
"""

from __future__ import annotations

import argparse
import logging
from decimal import Decimal

from app.clients.impact_api_client import ImpactAPIClient
from impact.calculator import calculate_donation_impact, calculate_volunteer_impact
from impact.storyteller import narrate
from slides.controller import initial_state, is_last_slide, next_slide, start_loading
from slides.loader import run_loading_step
from slides.state import GENERIC_DONATION_SEQUENCE, VOLUNTEER_SEQUENCE, SlideState


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print the slides a visitor would see.")
    parser.add_argument("amount", type=Decimal, help="Donation dollars, or hours with --volunteer")
    parser.add_argument("--email", default=None, help="Returning donor email to personalise the slides")
    parser.add_argument("--volunteer", action="store_true", help="Use the volunteer page sequence")
    return parser.parse_args(argv)


def _describe(state: SlideState) -> str:
    impact = state.impact
    meals = getattr(impact, "meals_provided", 0)
    greeting = f" for {state.donor.first_name or state.donor.email}" if state.donor else ""
    return f"[{state.sequence.name}] {state.current.value}{greeting} meals={meals}"


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    args = _parse_args(argv)

    if args.volunteer:
        state = start_loading(initial_state(VOLUNTEER_SEQUENCE), args.amount)
        state = run_loading_step(state, fetch_donor=None, calculate=calculate_volunteer_impact)
    else:
        client = ImpactAPIClient()
        state = start_loading(initial_state(GENERIC_DONATION_SEQUENCE), args.amount, donor_email=args.email)
        state = run_loading_step(
            state,
            fetch_donor=client.fetch_donor,
            calculate=lambda amount: narrate(calculate_donation_impact(amount)),
        )

    if state.error:
        print(f"! {state.error}")
    print(_describe(state))
    while not is_last_slide(state):
        state = next_slide(state)
        print(_describe(state))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
