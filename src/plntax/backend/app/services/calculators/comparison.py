"""Compose the three regimes into a single comparison."""

from __future__ import annotations

from plntax.backend.app.models import TaxInputs, TaxResult
from plntax.backend.config.schema import RateConfiguration

from .brackets import bracket_rates, resolve_bracket
from .estonian_cit import calculate_estonian_cit
from .linear import calculate_linear_tax
from .llc import calculate_llc_tax


def calculate_comparison(inputs: TaxInputs, config: RateConfiguration) -> TaxResult:
    """Return the tax due under each regime for validated ``inputs``."""

    bracket = resolve_bracket(inputs.selector, config.brackets)
    rates = bracket_rates(bracket, config.brackets)

    return TaxResult(
        estonian_cit=calculate_estonian_cit(inputs.profit_to_distribute, rates),
        linear_tax=calculate_linear_tax(inputs.income, config.linear),
        llc_tax=calculate_llc_tax(inputs.income, inputs.profit_to_distribute, rates),
        bracket=bracket,
    )


__all__ = ["calculate_comparison"]
