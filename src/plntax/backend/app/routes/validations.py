"""Field validation endpoint used while the form is being edited."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from plntax.backend.app.services import validate_payload
from plntax.backend.services import build_calculation_response, parse_calculation_payload

blueprint = Blueprint("validations", __name__, url_prefix="/api/v1")


@blueprint.post("/validations")
def validate_fields() -> tuple[Any, int]:
    """Return per-field verdicts for whichever amounts were submitted.

    Invalid amounts are the expected content of this endpoint, so the
    response status stays ``200`` regardless of the verdict.
    """

    payload = parse_calculation_payload(request)
    return build_calculation_response(validate_payload(payload))
