"""Application factory for the invoice ROI simulator backend."""

from __future__ import annotations

import os
from warnings import warn

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest

from invoiceroi.backend.config.schema import SimulationConstants
from invoiceroi.backend.version import get_project_version

from . import extensions
from .http import problem_response
from .routes import register_routes
from .services.scenario_store import ScenarioRepository


def _parse_allowed_origins(raw: str | None) -> set[str]:
    """Convert an environment variable into a normalised set of origins."""

    if not raw:
        return set()

    return {origin.strip() for origin in raw.split(",") if origin.strip()}


def create_app(
    *,
    repository: ScenarioRepository | None = None,
    constants: SimulationConstants | None = None,
) -> Flask:
    """Create and configure the Flask application instance.

    ``repository`` and ``constants`` default to the environment-configured
    scenario store and the packaged simulation constants.
    """

    app = Flask(__name__)

    allowed_origins = _parse_allowed_origins(os.getenv("INVOICEROI_ALLOWED_ORIGINS"))

    if not allowed_origins:
        warn(
            "No allowed origins configured; cross-origin requests will be rejected.",
            stacklevel=1,
        )

    CORS(
        app,
        resources={r"/api/*": {"origins": sorted(allowed_origins)}},
        supports_credentials=False,
        methods=["GET", "OPTIONS", "POST", "DELETE"],
        allow_headers=["Content-Type"],
        expose_headers=["Content-Disposition"],
    )

    extensions.init_app(app, repository=repository, constants=constants)
    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        return jsonify({"status": "ok", "version": get_project_version()})

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed payloads."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        """Surface request validation errors to clients."""

        return problem_response(
            "validation_error", status=400, message=str(error)
        ).to_response()

    return app


__all__ = ["create_app"]
