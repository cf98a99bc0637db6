"""Pydantic models describing the public API surface."""

from __future__ import annotations

import re
from typing import Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

__all__ = [
    "AMOUNT_FIELDS",
    "AmountValue",
    "CalculationRequest",
    "CalculationResponse",
    "FieldValidationEntry",
    "ResponseMeta",
    "ResultEntry",
    "ValidationRequest",
    "ValidationResponse",
    "format_validation_error",
]

AMOUNT_FIELDS = ("gross_revenue", "income", "profit_to_distribute")
SUPPORTED_CIT_RATES = (9, 19)

# Free text as typed into the form, or a JSON number.
AmountValue = Union[str, float]

_CIT_RATE_PATTERN = re.compile(r"^\s*(\d+(?:[.,]\d+)?)\s*%?\s*$")


def _reject_boolean_amount(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("amount must be provided as text or a number")
    return value


def _coerce_cit_rate(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("cit_rate must be 9 or 19")
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _CIT_RATE_PATTERN.match(str(value))
        if match is None:
            raise ValueError("cit_rate must be 9 or 19")
        number = float(match.group(1).replace(",", "."))
    # Accept fractional rates such as 0.09 as well as whole percentages.
    if 0 < number < 1:
        number *= 100
    rate = int(round(number))
    if rate not in SUPPORTED_CIT_RATES or abs(number - rate) > 1e-9:
        raise ValueError("cit_rate must be 9 or 19")
    return rate


class CalculationRequest(BaseModel):
    """Complete payload accepted by the calculation endpoint.

    ``gross_revenue`` selects the revenue-threshold variant and ``cit_rate``
    the explicit-bracket variant; exactly one of them must be supplied.
    """

    model_config = ConfigDict(extra="forbid")

    locale: str | None = None
    income: AmountValue
    profit_to_distribute: AmountValue
    gross_revenue: AmountValue | None = None
    cit_rate: int | None = None

    @field_validator("income", "profit_to_distribute", "gross_revenue", mode="before")
    @classmethod
    def _validate_amount_type(cls, value: Any) -> Any:
        return _reject_boolean_amount(value)

    @field_validator("cit_rate", mode="before")
    @classmethod
    def _normalise_cit_rate(cls, value: Any) -> int | None:
        return _coerce_cit_rate(value)

    @field_validator("locale", mode="before")
    @classmethod
    def _normalise_locale(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @model_validator(mode="after")
    def _require_single_selector(self) -> "CalculationRequest":
        has_revenue = self.gross_revenue is not None
        has_rate = self.cit_rate is not None
        if has_revenue and has_rate:
            raise ValueError("Provide either gross_revenue or cit_rate, not both")
        if not has_revenue and not has_rate:
            raise ValueError("Provide gross_revenue or cit_rate to select the CIT bracket")
        return self

    @property
    def variant(self) -> str:
        return "revenue_threshold" if self.gross_revenue is not None else "explicit_rate"

    def amounts(self) -> dict[str, AmountValue]:
        """Return the raw amount fields that belong to this input shape."""

        values: dict[str, AmountValue] = {}
        if self.gross_revenue is not None:
            values["gross_revenue"] = self.gross_revenue
        values["income"] = self.income
        values["profit_to_distribute"] = self.profit_to_distribute
        return values


class ValidationRequest(BaseModel):
    """Partial payload used to re-validate fields while the user types.

    ``cit_rate`` is accepted so the explicit-bracket form can post its whole
    state; it plays no part in amount validation.
    """

    model_config = ConfigDict(extra="forbid")

    locale: str | None = None
    gross_revenue: AmountValue | None = None
    income: AmountValue | None = None
    profit_to_distribute: AmountValue | None = None
    cit_rate: int | None = None

    @field_validator("income", "profit_to_distribute", "gross_revenue", mode="before")
    @classmethod
    def _validate_amount_type(cls, value: Any) -> Any:
        return _reject_boolean_amount(value)

    @field_validator("cit_rate", mode="before")
    @classmethod
    def _normalise_cit_rate(cls, value: Any) -> int | None:
        return _coerce_cit_rate(value)

    def amounts(self) -> dict[str, AmountValue]:
        return {
            name: getattr(self, name)
            for name in AMOUNT_FIELDS
            if getattr(self, name) is not None
        }


class ResultEntry(BaseModel):
    """One regime's tax figure in numeric and display form."""

    model_config = ConfigDict(extra="forbid")

    amount: float
    formatted: str
    label: str


class ResponseMeta(BaseModel):
    """Metadata returned alongside the calculation output."""

    model_config = ConfigDict(extra="forbid")

    locale: str
    currency: str
    variant: str
    bracket: str
    bracket_label: str
    cit_rate: int


class CalculationResponse(BaseModel):
    """Full response payload produced by the calculation service."""

    model_config = ConfigDict(extra="forbid")

    results: dict[str, ResultEntry]
    inputs: dict[str, str]
    meta: ResponseMeta


class FieldValidationEntry(BaseModel):
    """Serialised verdict for a single field."""

    model_config = ConfigDict(extra="forbid")

    valid: bool
    code: str | None = None
    message: str | None = None
    value: float | None = None
    formatted: str | None = None


class ValidationResponse(BaseModel):
    """Payload returned by the field validation endpoint."""

    model_config = ConfigDict(extra="forbid")

    valid: bool
    cross_field_valid: bool
    fields: dict[str, FieldValidationEntry]
    locale: str


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid calculation payload: {details}"
