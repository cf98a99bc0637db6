"""Selection of the CIT bracket for either input shape."""

from __future__ import annotations

from plntax.backend.app.models import Bracket, ByRevenueThreshold, ExplicitBracket
from plntax.backend.config.schema import BracketConfig, BracketRates


def resolve_bracket(
    selector: ByRevenueThreshold | ExplicitBracket, config: BracketConfig
) -> Bracket:
    """Return the bracket denoted by ``selector``.

    Revenue equal to the threshold still qualifies for the reduced bracket.
    """

    if isinstance(selector, ByRevenueThreshold):
        if selector.gross_revenue <= config.revenue_threshold:
            return Bracket.REDUCED
        return Bracket.STANDARD

    if selector.cit_rate == config.reduced.cit_percent:
        return Bracket.REDUCED
    if selector.cit_rate == config.standard.cit_percent:
        return Bracket.STANDARD
    raise ValueError(f"No bracket configured for a {selector.cit_rate}% CIT rate")


def bracket_rates(bracket: Bracket, config: BracketConfig) -> BracketRates:
    """Return the configured rates for ``bracket``."""

    return config.reduced if bracket is Bracket.REDUCED else config.standard


__all__ = ["bracket_rates", "resolve_bracket"]
