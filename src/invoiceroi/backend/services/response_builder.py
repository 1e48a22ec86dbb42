"""Utilities for serialising simulation responses."""

from __future__ import annotations

from typing import Any, Tuple

from flask import Response, jsonify
from werkzeug.utils import secure_filename

from invoiceroi.backend.app.models import SimulationResult

ResponseTuple = Tuple[Any, int]

DEFAULT_REPORT_FILENAME = "roi_report"


def build_simulation_response(result: SimulationResult) -> ResponseTuple:
    """Return a Flask JSON response for the simulation ``result``."""

    return jsonify(result.to_payload()), 200


def report_filename(scenario_name: str | None) -> str:
    """Return a filesystem-safe PDF filename derived from ``scenario_name``."""

    stem = secure_filename(scenario_name or "") or DEFAULT_REPORT_FILENAME
    return f"{stem}.pdf"


def build_pdf_response(pdf_bytes: bytes, scenario_name: str | None) -> Response:
    """Wrap ``pdf_bytes`` in a download response."""

    response = Response(pdf_bytes, mimetype="application/pdf")
    response.headers["Content-Disposition"] = (
        f"attachment; filename={report_filename(scenario_name)}"
    )
    return response
