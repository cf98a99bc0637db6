"""Core services: amount normalisation, validation, and tax calculation."""

from .amounts import InvalidAmountError, format_amount, normalise_amount_text, parse_amount
from .calculation_service import (
    InputValidationError,
    calculate_tax,
    recompute,
    serialise_outcome,
    validate_payload,
)
from .validation import validate_amount, validate_fields, validate_request

__all__ = [
    "InputValidationError",
    "InvalidAmountError",
    "calculate_tax",
    "format_amount",
    "normalise_amount_text",
    "parse_amount",
    "recompute",
    "serialise_outcome",
    "validate_amount",
    "validate_fields",
    "validate_payload",
    "validate_request",
]
