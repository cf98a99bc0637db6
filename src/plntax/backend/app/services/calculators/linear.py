"""Flat-rate personal income tax for sole proprietors."""

from __future__ import annotations

from plntax.backend.config.schema import HealthContributionConfig, LinearTaxConfig


def calculate_health_contribution(
    income: float, config: HealthContributionConfig
) -> float:
    """Return the deductible health contribution, capped at ``config.cap``."""

    return min(income * config.rate, config.cap)


def calculate_linear_tax(income: float, config: LinearTaxConfig) -> float:
    """Return the flat-rate tax due on ``income``.

    Income below the flat-rate threshold pays the minimum tax plus the lower
    rate; income above the surtax threshold pays the surtax rate on the excess.
    """

    contribution = calculate_health_contribution(income, config.health_contribution)
    taxable_income = income - contribution

    if taxable_income > config.surtax_threshold:
        return (
            (taxable_income - config.surtax_threshold) * config.surtax_rate
            + config.surtax_threshold * config.rate
        )
    if taxable_income > config.flat_rate_threshold:
        return taxable_income * config.rate
    if taxable_income > 0:
        return config.minimum_tax + taxable_income * config.lower_rate
    return config.minimum_tax


__all__ = ["calculate_health_contribution", "calculate_linear_tax"]
