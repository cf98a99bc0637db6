"""Unit tests for calculation request parsing helpers."""

from __future__ import annotations

import pytest
from flask import Flask, request
from werkzeug.exceptions import BadRequest

from plntax.backend.services.request_parser import parse_calculation_payload

PAYLOAD = {"cit_rate": 9, "income": "1000", "profit_to_distribute": "0"}


def test_parse_payload_uses_accept_language(app: Flask) -> None:
    """Accept-Language header should supply the locale when absent."""

    with app.test_request_context(
        "/api/v1/calculations",
        method="POST",
        json=PAYLOAD,
        headers={"Accept-Language": "en-GB,en;q=0.9"},
    ):
        payload = parse_calculation_payload(request)

    assert payload["locale"] == "en"


def test_parse_payload_prefers_query_string_over_header(app: Flask) -> None:
    with app.test_request_context(
        "/api/v1/calculations?locale=en",
        method="POST",
        json=PAYLOAD,
        headers={"Accept-Language": "pl"},
    ):
        payload = parse_calculation_payload(request)

    assert payload["locale"] == "en"


def test_parse_payload_preserves_explicit_locale(app: Flask) -> None:
    """Explicit locale fields should be normalised without overrides."""

    with app.test_request_context(
        "/api/v1/calculations",
        method="POST",
        json={**PAYLOAD, "locale": "pl_PL"},
        headers={"Accept-Language": "en"},
    ):
        payload = parse_calculation_payload(request)

    assert payload["locale"] == "pl"


def test_parse_payload_defaults_to_polish(app: Flask) -> None:
    with app.test_request_context("/api/v1/calculations", method="POST", json=PAYLOAD):
        payload = parse_calculation_payload(request)

    assert payload["locale"] == "pl"


def test_parse_payload_rejects_non_object(app: Flask) -> None:
    """Non-object JSON payloads should trigger BadRequest responses."""

    with app.test_request_context(
        "/api/v1/calculations",
        method="POST",
        json=["not", "an", "object"],
    ):
        with pytest.raises(BadRequest):
            parse_calculation_payload(request)
