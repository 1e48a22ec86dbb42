"""Service-layer helpers for the invoice ROI backend."""

from invoiceroi.backend.app.services.calculation_service import compute, run_simulation

from .request_parser import parse_json_object, parse_model, parse_scenario_id
from .response_builder import build_pdf_response, build_simulation_response

__all__ = [
    "compute",
    "run_simulation",
    "parse_json_object",
    "parse_model",
    "parse_scenario_id",
    "build_pdf_response",
    "build_simulation_response",
]
