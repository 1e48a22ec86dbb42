"""REST endpoint for stateless ROI simulations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from invoiceroi.backend.app.extensions import get_constants
from invoiceroi.backend.services import (
    build_simulation_response,
    parse_json_object,
    run_simulation,
)

blueprint = Blueprint("simulations", __name__, url_prefix="/api/v1")


@blueprint.post("/simulate")
def create_simulation() -> tuple[Any, int]:
    """Run a simulation for the submitted inputs without persisting it."""

    payload = parse_json_object(request)
    _, result = run_simulation(payload, get_constants())

    return build_simulation_response(result)
