"""
app/clients/impact_api_client.py

HTTP client for the impact API, used by the slide loading step to fetch a
returning donor's history.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any
from urllib.parse import quote

import requests
from pydantic import ValidationError

from app.config import ImpactAPISettings, get_impact_api_settings
from app.schemas.donor import GivingSummaryResponse
from impact.fiscal import GivingSummary
from slides.state import DonorContext

logger = logging.getLogger(__name__)


class ImpactAPIError(RuntimeError):
    """
    Raised when the impact API cannot be reached or answers with an error.
    """


class ImpactAPIClient:
    """
    Thin requests wrapper. No retries: a failed fetch degrades the slides
    instead of delaying them.
    """

    def __init__(
        self,
        *,
        settings: ImpactAPISettings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        resolved = settings or get_impact_api_settings()
        self._base_url = resolved.base_url.rstrip("/")
        self._timeout_seconds = resolved.timeout_seconds
        self._session = session or requests.Session()

    def fetch_donor(self, identifier: str) -> DonorContext | None:
        """
        Fetch ``GET /api/donor/{identifier}``.

        Returns ``None`` on 404 and raises :class:`ImpactAPIError` for
        transport failures, other error statuses and malformed payloads.
        """

        url = f"{self._base_url}/api/donor/{quote(identifier.strip(), safe='')}"
        response = self._request("GET", url)
        if response.status_code == 404:
            logger.info("Donor not found identifier=%s", identifier)
            return None

        payload = self._json(response)
        try:
            giving = GivingSummaryResponse.model_validate(payload.get("givingSummary") or {})
        except ValidationError as exc:
            raise ImpactAPIError("Donor payload has an invalid giving summary.") from exc

        donor = payload.get("donor") or {}
        return DonorContext(
            email=str(payload.get("email") or donor.get("email") or identifier).strip().lower(),
            first_name=donor.get("firstName"),
            giving=_to_giving_summary(giving),
        )

    def calculate_impact(self, amount: Decimal | float) -> dict[str, Any]:
        """
        Fetch ``POST /api/calculate-impact`` and return the camelCase impact payload.
        """

        response = self._request("POST", f"{self._base_url}/api/calculate-impact", json={"amount": float(amount)})
        payload = self._json(response)
        impact = payload.get("impact")
        if not isinstance(impact, dict):
            raise ImpactAPIError("Impact payload is missing the 'impact' object.")
        return impact

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            response = self._session.request(method=method, url=url, timeout=self._timeout_seconds, **kwargs)
        except (requests.Timeout, requests.ConnectionError) as exc:
            logger.error("Impact API request failed method=%s url=%s error=%s", method, url, exc)
            raise ImpactAPIError(f"Impact API unreachable: {exc}") from exc

        if response.status_code == 404:
            return response
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            logger.error(
                "Impact API request failed method=%s url=%s status=%s",
                method,
                url,
                response.status_code,
            )
            raise ImpactAPIError(f"Impact API responded with status {response.status_code}.") from exc
        return response

    @staticmethod
    def _json(response: requests.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            raise ImpactAPIError("Impact API response was not valid JSON.") from exc
        if not isinstance(payload, dict):
            raise ImpactAPIError("Impact API response was not a JSON object.")
        return payload


def _to_giving_summary(response: GivingSummaryResponse) -> GivingSummary:
    def _decimal(value: float | None) -> Decimal | None:
        return Decimal(str(value)) if value is not None else None

    return GivingSummary(
        lifetime_giving=Decimal(str(response.lifetime_giving)),
        total_gifts=response.total_gifts,
        first_gift_date=response.first_gift_date,
        last_gift_date=response.last_gift_date,
        last_gift_amount=_decimal(response.last_gift_amount),
        largest_gift_amount=_decimal(response.largest_gift_amount),
        largest_gift_date=response.largest_gift_date,
        consecutive_years_giving=response.consecutive_years_giving,
        giving_by_fiscal_year={
            label: Decimal(str(total)) for label, total in response.giving_by_fiscal_year.items()
        },
    )
