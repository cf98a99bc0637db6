"""Application factory for PLNTax backend services."""

from __future__ import annotations

import logging
import os
from warnings import warn

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest

from plntax.backend.config.schema import ConfigurationError

from .http import problem_response

ALLOWED_ORIGINS_ENV = "PLNTAX_ALLOWED_ORIGINS"

_LOGGER = logging.getLogger(__name__)


def _parse_allowed_origins(raw: str | None) -> set[str]:
    """Convert an environment variable into a normalised set of origins."""

    if not raw:
        return set()

    return {origin.strip() for origin in raw.split(",") if origin.strip()}


def create_app() -> Flask:
    """Create and configure the Flask application instance."""

    from .routes import register_routes
    from .routes.config import get_configuration_metadata
    from .services.calculation_service import InputValidationError, serialise_outcome

    app = Flask(__name__)

    allowed_origins = _parse_allowed_origins(os.getenv(ALLOWED_ORIGINS_ENV))
    if not allowed_origins:
        warn(
            "No allowed origins configured; cross-origin requests will be rejected.",
            stacklevel=1,
        )

    CORS(
        app,
        resources={r"/api/*": {"origins": sorted(allowed_origins)}},
        supports_credentials=False,
        methods=["GET", "OPTIONS", "POST"],
        allow_headers=["Content-Type"],
    )

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        payload = {"status": "ok", **get_configuration_metadata()}
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(InputValidationError)
    def handle_input_validation_error(error: InputValidationError):
        """Report rejected amounts field by field."""

        outcome = serialise_outcome(error.outcome, error.locale)
        return problem_response(
            "validation_error",
            status=400,
            message=str(error),
            fields=outcome["fields"],
            locale=outcome["locale"],
        ).to_response()

    @app.errorhandler(ConfigurationError)
    def handle_configuration_error(error: ConfigurationError):
        """Surface broken rate configuration as a server-side failure."""

        _LOGGER.error("Rate configuration is invalid: %s", error)
        return problem_response(
            "configuration_error", status=500, message="Rate configuration is invalid"
        ).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        """Gracefully surface payload validation errors to clients."""

        return problem_response(
            "validation_error", status=400, message=str(error)
        ).to_response()

    return app
