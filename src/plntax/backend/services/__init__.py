"""Request and response helpers for the PLNTax HTTP endpoints."""

from .request_parser import parse_calculation_payload
from .response_builder import build_calculation_response

__all__ = ["build_calculation_response", "parse_calculation_payload"]
