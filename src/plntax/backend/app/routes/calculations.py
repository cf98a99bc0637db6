"""REST endpoints for tax calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from plntax.backend.app.services import calculate_tax
from plntax.backend.services import build_calculation_response, parse_calculation_payload

blueprint = Blueprint("calculations", __name__, url_prefix="/api/v1")


@blueprint.post("/calculations")
def create_calculation() -> tuple[Any, int]:
    """Compare the three regimes for the submitted JSON payload."""

    payload = parse_calculation_payload(request)
    result = calculate_tax(payload)

    return build_calculation_response(result)
