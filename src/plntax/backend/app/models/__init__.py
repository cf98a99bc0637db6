"""Typed models shared across the calculation services.

Validated calculator inputs and the bracket selector are frozen Pydantic
models so that an inconsistent combination cannot be constructed at all;
derived results and validation outcomes are plain dataclasses built once per
request and discarded afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .api import (
    AMOUNT_FIELDS,
    CalculationRequest,
    CalculationResponse,
    FieldValidationEntry,
    ResponseMeta,
    ResultEntry,
    ValidationRequest,
    ValidationResponse,
    format_validation_error,
)

__all__ = [
    "AMOUNT_FIELDS",
    "Bracket",
    "ByRevenueThreshold",
    "CalculationRequest",
    "CalculationResponse",
    "ExplicitBracket",
    "FieldOutcome",
    "FieldValidationEntry",
    "RateSelector",
    "ResponseMeta",
    "ResultEntry",
    "TaxInputs",
    "TaxResult",
    "ValidationCode",
    "ValidationOutcome",
    "ValidationRequest",
    "ValidationResponse",
    "format_validation_error",
]


class Bracket(str, Enum):
    """CIT bracket driving the Estonian CIT and LLC rates."""

    REDUCED = "reduced"
    STANDARD = "standard"


class ValidationCode(str, Enum):
    """Reasons a monetary field can be rejected."""

    INVALID_NUMBER = "invalid_number"
    NEGATIVE = "negative"
    TOO_LARGE = "too_large"
    INCOME_EXCEEDS_REVENUE = "income_exceeds_revenue"
    PROFIT_EXCEEDS_INCOME = "profit_exceeds_income"

    @property
    def message_key(self) -> str:
        return f"errors.{self.value}"


class ByRevenueThreshold(BaseModel):
    """Derive the bracket from gross revenue against the configured threshold."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["revenue_threshold"] = "revenue_threshold"
    gross_revenue: float = Field(..., ge=0)


class ExplicitBracket(BaseModel):
    """Bracket chosen directly by its CIT rate in percent."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["explicit_rate"] = "explicit_rate"
    cit_rate: Literal[9, 19]


RateSelector = Annotated[
    Union[ByRevenueThreshold, ExplicitBracket], Field(discriminator="kind")
]


class TaxInputs(BaseModel):
    """Validated numeric inputs accepted by the calculators."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    income: float = Field(..., ge=0)
    profit_to_distribute: float = Field(..., ge=0)
    selector: RateSelector

    @property
    def gross_revenue(self) -> float | None:
        if isinstance(self.selector, ByRevenueThreshold):
            return self.selector.gross_revenue
        return None

    @model_validator(mode="after")
    def _check_ordering(self) -> "TaxInputs":
        if self.profit_to_distribute > self.income:
            raise ValueError("profit_to_distribute cannot exceed income")
        gross_revenue = self.gross_revenue
        if gross_revenue is not None and self.income > gross_revenue:
            raise ValueError("income cannot exceed gross_revenue")
        return self


@dataclass(frozen=True)
class TaxResult:
    """Tax due under each regime for one set of inputs."""

    estonian_cit: float
    linear_tax: float
    llc_tax: float
    bracket: Bracket

    def amounts(self) -> dict[str, float]:
        return {
            "estonian_cit": self.estonian_cit,
            "linear_tax": self.linear_tax,
            "llc_tax": self.llc_tax,
        }


@dataclass(frozen=True)
class FieldOutcome:
    """Validation verdict for a single monetary field."""

    valid: bool
    code: ValidationCode | None = None
    message: str | None = None
    value: float | None = None
    formatted: str | None = None


@dataclass(frozen=True)
class ValidationOutcome:
    """Per-field verdicts plus the result of the cross-field ordering rules."""

    fields: Mapping[str, FieldOutcome] = field(default_factory=dict)
    cross_field_valid: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @property
    def valid(self) -> bool:
        return self.cross_field_valid and all(
            outcome.valid for outcome in self.fields.values()
        )

    @property
    def errors(self) -> dict[str, FieldOutcome]:
        return {name: outcome for name, outcome in self.fields.items() if not outcome.valid}

    def value(self, name: str) -> float | None:
        outcome = self.fields.get(name)
        return outcome.value if outcome is not None else None
