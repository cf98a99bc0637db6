"""Orchestrate request validation, calculation, and response formatting.

``recompute`` is the stateless core entry point: it returns either a
:class:`TaxResult` or the :class:`ValidationOutcome` explaining why no result
could be produced, never both. ``calculate_tax`` and ``validate_payload`` wrap
it for the HTTP layer, adding translation, currency formatting, and optional
profiling.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from plntax.backend.app.localization import Translator, get_translator
from plntax.backend.app.models import (
    ByRevenueThreshold,
    CalculationRequest,
    CalculationResponse,
    ExplicitBracket,
    TaxInputs,
    TaxResult,
    ValidationOutcome,
    ValidationRequest,
    ValidationResponse,
    format_validation_error,
)
from plntax.backend.config.rates import load_rate_configuration
from plntax.backend.config.schema import RateConfiguration

from .amounts import format_amount, parse_amount
from .calculators import bracket_rates, calculate_comparison, round_currency
from .validation import validate_fields, validate_request

_LOGGER = logging.getLogger(__name__)

PROFILE_ENV = "PLNTAX_PROFILE_CALCULATIONS"


class InputValidationError(ValueError):
    """Raised by the HTTP wrappers when entered amounts fail validation."""

    def __init__(self, outcome: ValidationOutcome, locale: str) -> None:
        details = "; ".join(
            f"{name}: {entry.message}" for name, entry in outcome.errors.items()
        )
        super().__init__(details or "Invalid input")
        self.outcome = outcome
        self.locale = locale


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv(PROFILE_ENV, "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _coerce_request(payload: Mapping[str, Any] | CalculationRequest) -> CalculationRequest:
    if isinstance(payload, CalculationRequest):
        return payload
    if not isinstance(payload, Mapping):
        raise ValueError("Payload must be a mapping")
    try:
        return CalculationRequest.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc)) from exc


def _build_tax_inputs(
    request: CalculationRequest, outcome: ValidationOutcome
) -> TaxInputs:
    if request.cit_rate is not None:
        selector: ByRevenueThreshold | ExplicitBracket = ExplicitBracket(
            cit_rate=request.cit_rate
        )
    else:
        selector = ByRevenueThreshold(gross_revenue=outcome.value("gross_revenue"))

    return TaxInputs(
        income=outcome.value("income"),
        profit_to_distribute=outcome.value("profit_to_distribute"),
        selector=selector,
    )


def recompute(
    request: Mapping[str, Any] | CalculationRequest,
    *,
    config: RateConfiguration | None = None,
    translator: Translator | None = None,
) -> TaxResult | ValidationOutcome:
    """Validate ``request`` and, when it is valid, calculate all three regimes.

    Invalid amounts are reported through the returned outcome. Only a
    structurally malformed mapping raises ``ValueError``.
    """

    request_model = _coerce_request(request)
    config = config or load_rate_configuration()
    translator = translator or get_translator(request_model.locale)

    outcome = validate_request(request_model, config=config, translator=translator)
    if not outcome.valid:
        return outcome

    inputs = _build_tax_inputs(request_model, outcome)
    return calculate_comparison(inputs, config)


def serialise_outcome(outcome: ValidationOutcome, locale: str) -> dict[str, Any]:
    """Return the JSON payload describing ``outcome``."""

    fields = {
        name: {
            "valid": entry.valid,
            "code": entry.code.value if entry.code else None,
            "message": entry.message,
            "value": entry.value,
            "formatted": entry.formatted,
        }
        for name, entry in outcome.fields.items()
    }
    response = ValidationResponse.model_validate(
        {
            "valid": outcome.valid,
            "cross_field_valid": outcome.cross_field_valid,
            "fields": fields,
            "locale": locale,
        }
    )
    return response.model_dump(mode="json", exclude_none=True)


def _build_response(
    request: CalculationRequest,
    result: TaxResult,
    config: RateConfiguration,
    translator: Translator,
) -> dict[str, Any]:
    rates = bracket_rates(result.bracket, config.brackets)

    results = {
        name: {
            "amount": round_currency(amount),
            "formatted": format_amount(amount),
            "label": translator(f"results.{name}"),
        }
        for name, amount in result.amounts().items()
    }
    inputs = {
        name: format_amount(round_currency(parse_amount(value)))
        for name, value in request.amounts().items()
    }
    meta = {
        "locale": translator.locale,
        "currency": config.currency,
        "variant": request.variant,
        "bracket": result.bracket.value,
        "bracket_label": translator(f"brackets.{result.bracket.value}"),
        "cit_rate": rates.cit_percent,
    }

    response_model = CalculationResponse.model_validate(
        {"results": results, "inputs": inputs, "meta": meta}
    )
    return response_model.model_dump(mode="json")


def calculate_tax(payload: Mapping[str, Any] | CalculationRequest) -> dict[str, Any]:
    """Compute the regime comparison for ``payload`` and format it for clients."""

    request = _coerce_request(payload)
    config = load_rate_configuration()
    translator = get_translator(request.locale)

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    with _profile_section("recompute", timings):
        result = recompute(request, config=config, translator=translator)

    if isinstance(result, ValidationOutcome):
        raise InputValidationError(result, translator.locale)

    with _profile_section("response", timings):
        response = _build_response(request, result, config, translator)

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "calculate_tax timings (ms): %s",
            {name: round(duration * 1000, 3) for name, duration in timings.items()},
        )

    return response


def validate_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Validate the supplied subset of fields, as done while the user types."""

    if not isinstance(payload, Mapping):
        raise ValueError("Payload must be a mapping")
    try:
        request = ValidationRequest.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc)) from exc

    translator = get_translator(request.locale)
    outcome = validate_fields(request.amounts(), translator=translator)
    return serialise_outcome(outcome, translator.locale)


__all__ = [
    "InputValidationError",
    "PROFILE_ENV",
    "calculate_tax",
    "recompute",
    "serialise_outcome",
    "validate_payload",
]
