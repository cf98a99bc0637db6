"""Estonian CIT: tax charged only on distributed profit."""

from __future__ import annotations

from plntax.backend.config.schema import BracketRates


def calculate_estonian_cit(profit_to_distribute: float, rates: BracketRates) -> float:
    """Return the distribution tax due on ``profit_to_distribute``."""

    return profit_to_distribute * rates.estonian_distribution_rate


__all__ = ["calculate_estonian_cit"]
