"""Pydantic models describing the rate configuration schema."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class AmountLimits(ImmutableModel):
    """Accepted range for every monetary input field."""

    minimum_amount: float = 0.0
    maximum_amount: float

    @model_validator(mode="after")
    def _validate_range(self) -> AmountLimits:
        if self.minimum_amount < 0:
            raise ConfigurationError("Minimum amount must be non-negative")
        if self.maximum_amount <= self.minimum_amount:
            raise ConfigurationError("Maximum amount must exceed the minimum amount")
        return self


class BracketRates(ImmutableModel):
    """Rates applied within a single CIT bracket."""

    cit_rate: float
    estonian_distribution_rate: float
    llc_distributed_rate: float
    llc_retained_rate: float

    @model_validator(mode="after")
    def _validate_rates(self) -> BracketRates:
        for name in (
            "cit_rate",
            "estonian_distribution_rate",
            "llc_distributed_rate",
            "llc_retained_rate",
        ):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"Bracket rate '{name}' must be non-negative")
        return self

    @property
    def cit_percent(self) -> int:
        """Return the CIT rate as a whole percentage (``9`` or ``19``)."""

        return int(round(self.cit_rate * 100))


class BracketConfig(ImmutableModel):
    """Reduced and standard CIT brackets plus the revenue threshold between them."""

    revenue_threshold: float
    dividend_tax_rate: float
    reduced: BracketRates
    standard: BracketRates

    @model_validator(mode="after")
    def _validate_threshold(self) -> BracketConfig:
        if self.revenue_threshold <= 0:
            raise ConfigurationError("Revenue threshold must be a positive value")
        if self.reduced.cit_percent == self.standard.cit_percent:
            raise ConfigurationError("Reduced and standard brackets must use distinct CIT rates")
        return self


class HealthContributionConfig(ImmutableModel):
    """Health insurance contribution deducted before the flat-rate tax."""

    rate: float
    cap: float

    @model_validator(mode="after")
    def _validate_values(self) -> HealthContributionConfig:
        if self.rate < 0:
            raise ConfigurationError("Health contribution rate must be non-negative")
        if self.cap < 0:
            raise ConfigurationError("Health contribution cap must be non-negative")
        return self


class LinearTaxConfig(ImmutableModel):
    """Parameters of the flat-rate personal income tax."""

    health_contribution: HealthContributionConfig
    minimum_tax: float
    lower_rate: float
    flat_rate_threshold: float
    rate: float
    surtax_threshold: float
    surtax_rate: float

    @model_validator(mode="after")
    def _validate_values(self) -> LinearTaxConfig:
        if self.minimum_tax < 0:
            raise ConfigurationError("Minimum tax must be non-negative")
        if self.flat_rate_threshold <= 0 or self.surtax_threshold <= 0:
            raise ConfigurationError("Linear tax thresholds must be positive values")
        return self


class RateConfiguration(ImmutableModel):
    """Complete set of constants used by the calculators."""

    meta: Mapping[str, Any] = Field(default_factory=dict)
    limits: AmountLimits
    brackets: BracketConfig
    linear: LinearTaxConfig

    @property
    def currency(self) -> str:
        return str(self.meta.get("currency", "PLN"))


__all__ = [
    "AmountLimits",
    "BracketConfig",
    "BracketRates",
    "ConfigurationError",
    "HealthContributionConfig",
    "ImmutableModel",
    "LinearTaxConfig",
    "RateConfiguration",
]
