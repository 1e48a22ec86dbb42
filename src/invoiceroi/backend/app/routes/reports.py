"""Endpoint producing PDF reports for ad-hoc simulations."""

from __future__ import annotations

import logging

from flask import Blueprint, Response, request

from invoiceroi.backend.app.extensions import get_constants
from invoiceroi.backend.app.models import ReportRequest
from invoiceroi.backend.app.services.report_service import render_pdf
from invoiceroi.backend.services import (
    build_pdf_response,
    parse_json_object,
    parse_model,
    run_simulation,
)

blueprint = Blueprint("reports", __name__, url_prefix="/api/v1/reports")

logger = logging.getLogger(__name__)


@blueprint.post("")
def generate_report() -> Response:
    """Simulate the submitted inputs and return the summary as a PDF."""

    payload = parse_json_object(request)
    metadata = parse_model(ReportRequest, payload)
    inputs, result = run_simulation(payload, get_constants())

    pdf_bytes = render_pdf(metadata.scenario_name, inputs, result, email=metadata.email)
    logger.debug("Generated report %r (%d bytes)", metadata.scenario_name, len(pdf_bytes))
    return build_pdf_response(pdf_bytes, metadata.scenario_name)


__all__ = ["blueprint"]
