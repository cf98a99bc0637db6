"""Tests for the localisation catalogue helpers."""

from __future__ import annotations

import json
from pathlib import Path

from plntax.backend.app.localization import get_translator, load_translations, normalise_locale
from plntax.backend.app.localization.checks import check_catalogues, required_backend_keys

TRANSLATIONS = Path(__file__).resolve().parents[2] / "src" / "plntax" / "translations"


def _read_backend_value(locale: str, key: str) -> str:
    payload = json.loads(TRANSLATIONS.joinpath(f"{locale}.json").read_text(encoding="utf-8"))
    return str(payload["backend"][key])


def test_get_translator_loads_shared_catalogue() -> None:
    translator = get_translator("en")

    assert translator("results.llc_tax") == _read_backend_value("en", "results.llc_tax")


def test_get_translator_falls_back_to_polish() -> None:
    """Unknown locales should fall back to the base catalogue."""

    translator = get_translator("fr")

    assert translator.locale == "pl"
    assert translator("errors.too_large") == "Kwota jest zbyt duża"


def test_translator_returns_key_for_unknown_messages() -> None:
    assert get_translator("en")("missing.key") == "missing.key"


def test_normalise_locale_handles_regions() -> None:
    assert normalise_locale("en-GB") == "en"
    assert normalise_locale("PL_pl") == "pl"
    assert normalise_locale(None) == "pl"


def test_load_translations_exposes_catalogue_payload() -> None:
    payload = load_translations("en")

    assert payload["locale"] == "en"
    assert set(payload["available_locales"]) >= {"en", "pl"}
    assert payload["backend"]["results.estonian_cit"] == "Estonian CIT"
    assert isinstance(payload["frontend"], dict)
    assert payload["fallback"]["locale"] == "pl"


def test_catalogues_are_consistent() -> None:
    assert check_catalogues() == []


def test_required_keys_cover_validation_codes() -> None:
    keys = required_backend_keys()

    assert "errors.profit_exceeds_income" in keys
    assert "brackets.standard" in keys
