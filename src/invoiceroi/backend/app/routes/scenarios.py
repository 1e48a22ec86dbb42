"""Endpoints for saving, listing, and exporting named scenarios."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Blueprint, Response, jsonify, request

from invoiceroi.backend.app.extensions import get_constants, get_repository
from invoiceroi.backend.app.http import scenario_not_found
from invoiceroi.backend.app.models import ScenarioRequest
from invoiceroi.backend.app.services.report_service import render_pdf
from invoiceroi.backend.services import (
    build_pdf_response,
    parse_json_object,
    parse_model,
    parse_scenario_id,
    run_simulation,
)

blueprint = Blueprint("scenarios", __name__, url_prefix="/api/v1/scenarios")

logger = logging.getLogger(__name__)


@blueprint.post("")
def create_scenario() -> tuple[Any, int]:
    """Compute the submitted inputs and store them as a named scenario."""

    payload = parse_json_object(request)
    metadata = parse_model(ScenarioRequest, payload)
    inputs, result = run_simulation(payload, get_constants())

    record = get_repository().save(metadata.scenario_name, inputs, result)
    logger.info("Saved scenario %s (%s)", record.id, record.name)

    return (
        jsonify({"message": "Scenario saved successfully", "scenario": record.to_payload()}),
        HTTPStatus.CREATED,
    )


@blueprint.get("")
def list_scenarios() -> tuple[Any, int]:
    """Return every stored scenario, newest first."""

    records = get_repository().list()
    return jsonify([record.to_payload() for record in records]), HTTPStatus.OK


@blueprint.get("/<string:scenario_id>")
def get_scenario(scenario_id: str) -> tuple[Any, int]:
    """Return a single stored scenario or a 404 problem payload."""

    identifier = parse_scenario_id(scenario_id)
    try:
        record = get_repository().get(identifier)
    except KeyError:
        return scenario_not_found(identifier).to_response()

    return jsonify(record.to_payload()), HTTPStatus.OK


@blueprint.delete("/<string:scenario_id>")
def delete_scenario(scenario_id: str) -> tuple[Any, int]:
    """Remove a stored scenario; deleting a missing id still succeeds."""

    identifier = parse_scenario_id(scenario_id)
    if get_repository().delete(identifier):
        logger.info("Deleted scenario %s", identifier)

    return jsonify({"message": "Deleted"}), HTTPStatus.OK


@blueprint.get("/<string:scenario_id>/pdf")
def download_scenario_pdf(scenario_id: str) -> Response | tuple[Any, int]:
    """Render a stored scenario as a PDF attachment."""

    identifier = parse_scenario_id(scenario_id)
    try:
        record = get_repository().get(identifier)
    except KeyError:
        return scenario_not_found(identifier).to_response()

    pdf_bytes = render_pdf(record.name, record.inputs, record.result)
    return build_pdf_response(pdf_bytes, record.name)


__all__ = ["blueprint"]
