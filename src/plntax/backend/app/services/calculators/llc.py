"""Limited liability company: CIT on all income plus dividend tax on payouts."""

from __future__ import annotations

from plntax.backend.config.schema import BracketRates


def calculate_llc_tax(
    income: float, profit_to_distribute: float, rates: BracketRates
) -> float:
    """Return the combined CIT and dividend tax for a company.

    Distributed profit carries the effective rate of CIT followed by dividend
    tax; retained income carries CIT alone.
    """

    retained = income - profit_to_distribute
    return (
        profit_to_distribute * rates.llc_distributed_rate
        + retained * rates.llc_retained_rate
    )


__all__ = ["calculate_llc_tax"]
