"""Expose the active rate configuration to the front-end.

The form uses these values to describe the brackets and limits without
duplicating the constants in JavaScript.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from plntax.backend.app.localization import get_translator
from plntax.backend.app.services.calculators import format_percentage
from plntax.backend.config.rates import load_rate_configuration
from plntax.backend.config.schema import BracketRates, RateConfiguration
from plntax.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata about the running service."""

    config = load_rate_configuration()
    return {
        "version": get_project_version(),
        "currency": config.currency,
    }


def _serialise_bracket(name: str, rates: BracketRates, label: str) -> dict[str, Any]:
    return {
        "id": name,
        "label": label,
        "cit_rate": rates.cit_percent,
        "estonian_distribution_rate": rates.estonian_distribution_rate,
        "estonian_distribution_rate_label": format_percentage(
            rates.estonian_distribution_rate
        ),
        "llc_distributed_rate": rates.llc_distributed_rate,
        "llc_retained_rate": rates.llc_retained_rate,
    }


def serialise_rate_configuration(config: RateConfiguration, locale: str | None) -> dict[str, Any]:
    """Return the JSON payload describing ``config`` for ``locale``."""

    translator = get_translator(locale)
    brackets = config.brackets
    linear = config.linear

    return {
        "locale": translator.locale,
        "currency": config.currency,
        "limits": config.limits.model_dump(mode="json"),
        "brackets": {
            "revenue_threshold": brackets.revenue_threshold,
            "dividend_tax_rate": brackets.dividend_tax_rate,
            "options": [
                _serialise_bracket("reduced", brackets.reduced, translator("brackets.reduced")),
                _serialise_bracket(
                    "standard", brackets.standard, translator("brackets.standard")
                ),
            ],
        },
        "linear": linear.model_dump(mode="json"),
    }


@blueprint.get("/rates")
def get_rates():
    """Return the rate configuration used by the calculators."""

    config = load_rate_configuration()
    payload = serialise_rate_configuration(config, request.args.get("locale"))
    payload["meta"] = get_configuration_metadata()
    return jsonify(payload), 200
