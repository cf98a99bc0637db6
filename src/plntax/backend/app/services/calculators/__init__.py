"""Domain-specific calculation helpers."""

from .brackets import bracket_rates, resolve_bracket
from .comparison import calculate_comparison
from .estonian_cit import calculate_estonian_cit
from .linear import calculate_health_contribution, calculate_linear_tax
from .llc import calculate_llc_tax
from .utils import format_percentage, round_currency

__all__ = [
    "bracket_rates",
    "calculate_comparison",
    "calculate_estonian_cit",
    "calculate_health_contribution",
    "calculate_linear_tax",
    "calculate_llc_tax",
    "format_percentage",
    "resolve_bracket",
    "round_currency",
]
