from __future__ import annotations

import json
from decimal import Decimal
from unittest.mock import Mock

import pytest
import requests

from app.clients.impact_api_client import ImpactAPIClient, ImpactAPIError
from app.config import ImpactAPISettings

SETTINGS = ImpactAPISettings(base_url="http://impact.test/", timeout_seconds=3.0)


def _response(status_code: int, payload=None, *, raw: bytes | None = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response._content = raw if raw is not None else json.dumps(payload).encode("utf-8")
    return response


def _client(*responses: requests.Response, side_effect=None) -> tuple[ImpactAPIClient, Mock]:
    session = Mock(spec=requests.Session)
    if side_effect is not None:
        session.request.side_effect = side_effect
    else:
        session.request.side_effect = list(responses)
    return ImpactAPIClient(settings=SETTINGS, session=session), session


DONOR_PAYLOAD = {
    "email": "jane@example.org",
    "donor": {"id": 7, "email": "jane@example.org", "firstName": "Jane"},
    "givingSummary": {
        "lifetimeGiving": 400.0,
        "totalGifts": 2,
        "lastGiftAmount": 250.0,
        "largestGiftAmount": 250.0,
        "consecutiveYearsGiving": 2,
        "givingByFiscalYear": {"FY24": 150.0, "FY25": 250.0},
        "impactAmount": 250.0,
    },
}


def test_fetch_donor_builds_context() -> None:
    client, session = _client(_response(200, DONOR_PAYLOAD))

    donor = client.fetch_donor("Jane@Example.org")

    assert donor.email == "jane@example.org"
    assert donor.first_name == "Jane"
    assert donor.giving.lifetime_giving == Decimal("400.0")
    assert donor.giving.last_gift_amount == Decimal("250.0")
    assert donor.giving.giving_by_fiscal_year == {"FY24": Decimal("150.0"), "FY25": Decimal("250.0")}
    kwargs = session.request.call_args.kwargs
    assert kwargs["url"] == "http://impact.test/api/donor/Jane%40Example.org"
    assert kwargs["timeout"] == 3.0


def test_fetch_donor_returns_none_on_404() -> None:
    client, _ = _client(_response(404, {"detail": "Donor not found"}))

    assert client.fetch_donor("nobody@example.org") is None


def test_fetch_donor_raises_on_server_error() -> None:
    client, _ = _client(_response(500, {"detail": "boom"}))

    with pytest.raises(ImpactAPIError):
        client.fetch_donor("jane@example.org")


def test_fetch_donor_raises_on_connection_error() -> None:
    client, _ = _client(side_effect=requests.ConnectionError("refused"))

    with pytest.raises(ImpactAPIError):
        client.fetch_donor("jane@example.org")


def test_fetch_donor_raises_on_malformed_payload() -> None:
    client, _ = _client(_response(200, raw=b"<html>oops</html>"))

    with pytest.raises(ImpactAPIError):
        client.fetch_donor("jane@example.org")


def test_fetch_donor_raises_on_invalid_giving_summary() -> None:
    client, _ = _client(_response(200, {"email": "jane@example.org", "givingSummary": {"totalGifts": "many"}}))

    with pytest.raises(ImpactAPIError):
        client.fetch_donor("jane@example.org")


def test_calculate_impact_posts_amount() -> None:
    client, session = _client(_response(200, {"impact": {"mealsProvided": 83}}))

    impact = client.calculate_impact(Decimal("100"))

    assert impact == {"mealsProvided": 83}
    assert session.request.call_args.kwargs["json"] == {"amount": 100.0}


def test_calculate_impact_requires_impact_object() -> None:
    client, _ = _client(_response(200, {"data": {}}))

    with pytest.raises(ImpactAPIError):
        client.calculate_impact(10)
