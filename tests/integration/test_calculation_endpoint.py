"""Integration tests for the tax calculation REST endpoint."""

from __future__ import annotations

import json
from http import HTTPStatus
from pathlib import Path
from typing import Dict, Iterable

import pytest
from flask.testing import FlaskClient

DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "regression_scenarios.json"


def _load_scenarios() -> Iterable[Dict[str, object]]:
    with DATA_PATH.open("r", encoding="utf-8") as handle:
        return json.load(handle)


@pytest.mark.parametrize("scenario", _load_scenarios(), ids=lambda item: item["name"])
def test_calculation_endpoint_matches_regression_scenarios(
    client: FlaskClient, scenario: Dict[str, object]
) -> None:
    """Each regression scenario should remain stable over time."""

    response = client.post("/api/v1/calculations", json=scenario["payload"])
    assert response.status_code == HTTPStatus.OK

    result = response.get_json()
    expected = scenario["expectations"]

    assert result["meta"]["bracket"] == expected["bracket"]
    for name, value in expected["results"].items():
        assert result["results"][name]["amount"] == pytest.approx(value)


def test_calculation_endpoint_uses_accept_language_header(client: FlaskClient) -> None:
    """Accept-Language header should influence locale if body omits it."""

    response = client.post(
        "/api/v1/calculations",
        json={"cit_rate": 9, "income": "100000", "profit_to_distribute": "0"},
        headers={"Accept-Language": "en"},
    )

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["meta"]["locale"] == "en"
    assert payload["results"]["estonian_cit"]["label"] == "Estonian CIT"


def test_calculation_endpoint_rejects_non_json(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/calculations",
        data="not-json",
        content_type="text/plain",
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "bad_request"
    assert "JSON" in payload["message"].upper()


def test_calculation_endpoint_reports_field_errors(client: FlaskClient) -> None:
    """Income above gross revenue yields field errors and no result."""

    response = client.post(
        "/api/v1/calculations",
        json={"gross_revenue": "100", "income": "500", "profit_to_distribute": "0"},
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "results" not in payload
    assert payload["fields"]["income"]["code"] == "income_exceeds_revenue"
    assert payload["fields"]["income"]["message"] == (
        "Dochód nie może być większy niż przychód brutto"
    )
    assert payload["fields"]["gross_revenue"]["valid"] is True


def test_calculation_endpoint_reports_per_field_hygiene_errors(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/calculations",
        json={
            "gross_revenue": "abc",
            "income": "-5",
            "profit_to_distribute": "2 000 000 000",
            "locale": "en",
        },
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    fields = response.get_json()["fields"]
    assert fields["gross_revenue"]["code"] == "invalid_number"
    assert fields["income"]["code"] == "negative"
    assert fields["profit_to_distribute"]["code"] == "too_large"
    assert fields["profit_to_distribute"]["message"] == "The amount is too large"


def test_calculation_endpoint_rejects_missing_selector(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/calculations",
        json={"income": "500", "profit_to_distribute": "0"},
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "cit_rate" in payload["message"]
    assert "fields" not in payload
