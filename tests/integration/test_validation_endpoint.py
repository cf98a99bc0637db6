"""Integration tests for the field validation endpoint."""

from __future__ import annotations

from http import HTTPStatus

from flask.testing import FlaskClient


def test_validation_endpoint_flags_profit_above_income(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/validations",
        json={"income": "1000", "profit_to_distribute": "1500"},
    )

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["valid"] is False
    assert payload["cross_field_valid"] is False
    assert payload["fields"]["profit_to_distribute"]["code"] == "profit_exceeds_income"


def test_validation_endpoint_clears_error_after_correction(client: FlaskClient) -> None:
    client.post("/api/v1/validations", json={"income": "1000", "profit_to_distribute": "1500"})

    response = client.post(
        "/api/v1/validations",
        json={"income": "1000", "profit_to_distribute": "1000"},
    )

    payload = response.get_json()
    assert payload["valid"] is True
    assert "code" not in payload["fields"]["profit_to_distribute"]


def test_validation_endpoint_formats_single_field(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/validations?locale=en",
        json={"gross_revenue": "8569000"},
    )

    payload = response.get_json()
    assert payload["locale"] == "en"
    assert payload["fields"]["gross_revenue"]["formatted"] == "8\u00a0569\u00a0000,00\u00a0zł"


def test_validation_endpoint_rejects_unknown_fields(client: FlaskClient) -> None:
    response = client.post("/api/v1/validations", json={"salary": "1"})

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["error"] == "validation_error"


def test_validation_endpoint_accepts_explicit_rate_form(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/validations",
        json={"income": "100", "profit_to_distribute": "50", "cit_rate": 9},
    )

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["valid"] is True
    assert set(payload["fields"]) == {"income", "profit_to_distribute"}


def test_validation_endpoint_rejects_unsupported_cit_rate(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/validations",
        json={"income": "100", "cit_rate": 12},
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert "9 or 19" in response.get_json()["message"]
