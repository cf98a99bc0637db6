"""Integration tests for the translations API."""

from __future__ import annotations

import json
from pathlib import Path

from flask.testing import FlaskClient

TRANSLATIONS_ROOT = Path(__file__).resolve().parents[2] / "src" / "plntax" / "translations"


def _load_catalogue(locale: str) -> dict:
    return json.loads(TRANSLATIONS_ROOT.joinpath(f"{locale}.json").read_text(encoding="utf-8"))


def test_translations_endpoint_returns_default_catalogue(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/")
    assert response.status_code == 200
    payload = response.get_json()

    expected = _load_catalogue("pl")
    assert payload["locale"] == "pl"
    assert "en" in payload["available_locales"]
    assert payload["backend"]["errors.negative"] == expected["backend"]["errors.negative"]
    assert payload["frontend"]["form"]["calculate"] == expected["frontend"]["form"]["calculate"]
    assert payload["fallback"]["locale"] == "pl"


def test_translations_endpoint_respects_locale_path(client: FlaskClient) -> None:
    response = client.get("/api/v1/translations/en")
    assert response.status_code == 200
    payload = response.get_json()

    expected = _load_catalogue("en")
    assert payload["locale"] == "en"
    assert payload["backend"]["errors.negative"] == expected["backend"]["errors.negative"]
    assert payload["frontend"]["results"]["heading"] == expected["frontend"]["results"]["heading"]
    assert payload["fallback"]["locale"] == "pl"


def test_translations_endpoint_falls_back_for_unknown_locale(client: FlaskClient) -> None:
    payload = client.get("/api/v1/translations/?locale=de").get_json()

    assert payload["locale"] == "pl"
