"""Field and cross-field validation of entered amounts.

Validation is stateless: every call inspects the values it is given and
returns a fresh :class:`ValidationOutcome`, so an error disappears as soon as
the corrected values are validated again.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace

from plntax.backend.app.localization import Translator, get_translator
from plntax.backend.app.models import (
    AMOUNT_FIELDS,
    CalculationRequest,
    FieldOutcome,
    ValidationCode,
    ValidationOutcome,
)
from plntax.backend.app.models.api import AmountValue
from plntax.backend.config.rates import load_rate_configuration
from plntax.backend.config.schema import AmountLimits, RateConfiguration

from .amounts import InvalidAmountError, format_amount, parse_amount
from .calculators import round_currency

_LOGGER = logging.getLogger(__name__)

# (bound, constrained field, code): the constrained field may not exceed the
# bound and carries the error.
ORDERING_RULES: tuple[tuple[str, str, ValidationCode], ...] = (
    ("gross_revenue", "income", ValidationCode.INCOME_EXCEEDS_REVENUE),
    ("income", "profit_to_distribute", ValidationCode.PROFIT_EXCEEDS_INCOME),
)


def _failure(
    code: ValidationCode, translator: Translator, value: float | None = None
) -> FieldOutcome:
    return FieldOutcome(
        valid=False,
        code=code,
        message=translator(code.message_key),
        value=value,
    )


def validate_amount(
    value: AmountValue, limits: AmountLimits, translator: Translator
) -> FieldOutcome:
    """Return the verdict for a single raw field value.

    The parsed amount is rounded to grosze first, so checks and calculations
    see the same figure the user is shown.
    """

    try:
        number = round_currency(parse_amount(value))
    except InvalidAmountError:
        return _failure(ValidationCode.INVALID_NUMBER, translator)

    if number < limits.minimum_amount:
        return _failure(ValidationCode.NEGATIVE, translator, number)
    if number > limits.maximum_amount:
        return _failure(ValidationCode.TOO_LARGE, translator, number)

    return FieldOutcome(valid=True, value=number, formatted=format_amount(number))


def _apply_ordering_rules(
    outcomes: dict[str, FieldOutcome], translator: Translator
) -> bool:
    valid = True
    for bound, constrained, code in ORDERING_RULES:
        if bound not in outcomes or constrained not in outcomes:
            continue
        upper = outcomes[bound].value
        current = outcomes[constrained].value
        if upper is None or current is None or current <= upper:
            continue
        outcomes[constrained] = replace(
            outcomes[constrained],
            valid=False,
            code=code,
            message=translator(code.message_key),
        )
        valid = False
    return valid


def validate_fields(
    values: Mapping[str, AmountValue],
    *,
    config: RateConfiguration | None = None,
    translator: Translator | None = None,
) -> ValidationOutcome:
    """Validate whichever known amount fields are present in ``values``.

    Ordering rules run only once every supplied field is individually valid,
    and only for pairs where both fields were supplied.
    """

    config = config or load_rate_configuration()
    translator = translator or get_translator()

    outcomes = {
        name: validate_amount(values[name], config.limits, translator)
        for name in AMOUNT_FIELDS
        if name in values
    }

    cross_field_valid = True
    if all(outcome.valid for outcome in outcomes.values()):
        cross_field_valid = _apply_ordering_rules(outcomes, translator)

    outcome = ValidationOutcome(fields=outcomes, cross_field_valid=cross_field_valid)
    if not outcome.valid:
        _LOGGER.debug(
            "Validation failed: %s",
            {name: entry.code.value for name, entry in outcome.errors.items() if entry.code},
        )
    return outcome


def validate_request(
    request: CalculationRequest,
    *,
    config: RateConfiguration | None = None,
    translator: Translator | None = None,
) -> ValidationOutcome:
    """Validate every amount field belonging to the request's input shape."""

    return validate_fields(request.amounts(), config=config, translator=translator)


__all__ = [
    "ORDERING_RULES",
    "validate_amount",
    "validate_fields",
    "validate_request",
]
