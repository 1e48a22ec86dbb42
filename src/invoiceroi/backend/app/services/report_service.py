"""Render downloadable PDF summaries of a simulation."""

from __future__ import annotations

import math
from typing import Iterable

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from invoiceroi.backend.app.models import ScenarioInput, SimulationResult

REPORT_TITLE = "Invoicing ROI Simulation Report"
REPORT_FOOTER = "Generated by Invoicing ROI Simulator"

_INPUT_LABELS: tuple[tuple[str, str], ...] = (
    ("monthly_invoice_volume", "Monthly invoice volume"),
    ("num_ap_staff", "AP staff"),
    ("avg_hours_per_invoice", "Hours per invoice"),
    ("hourly_wage", "Hourly wage"),
    ("error_rate_manual", "Manual error rate (%)"),
    ("error_cost", "Cost per error"),
    ("time_horizon_months", "Time horizon (months)"),
    ("one_time_implementation_cost", "Implementation cost"),
)

_RESULT_LABELS: tuple[tuple[str, str], ...] = (
    ("monthly_savings", "Monthly savings"),
    ("payback_months", "Payback (months)"),
    ("roi_percentage", "ROI (%)"),
    ("cumulative_savings", "Cumulative savings"),
    ("net_savings", "Net savings"),
)


def format_amount(value: float | None) -> str:
    """Format ``value`` with two decimals, or ``N/A`` when it is undefined."""

    if value is None or not math.isfinite(value):
        return "N/A"
    return f"{value:,.2f}"


def _latin1(text: str) -> str:
    # The built-in Helvetica font only covers Latin-1.
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _write_line(pdf: FPDF, text: str) -> None:
    pdf.multi_cell(pdf.epw, 6, text, new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def _input_rows(inputs: ScenarioInput) -> Iterable[tuple[str, str]]:
    for field, label in _INPUT_LABELS:
        value = getattr(inputs, field)
        if field == "time_horizon_months":
            yield label, str(value)
        else:
            yield label, format_amount(value)


def _result_rows(result: SimulationResult) -> Iterable[tuple[str, str]]:
    for field, label in _RESULT_LABELS:
        yield label, format_amount(getattr(result, field))


def render_pdf(
    scenario_name: str | None,
    inputs: ScenarioInput,
    result: SimulationResult,
    *,
    email: str | None = None,
) -> bytes:
    """Return a PDF document summarising ``inputs`` and ``result``."""

    pdf = FPDF()
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.set_margins(left=14, top=14, right=14)
    pdf.add_page()
    pdf.set_title(REPORT_TITLE)
    pdf.set_text_color(33, 37, 41)

    pdf.set_font("Helvetica", style="B", size=18)
    pdf.cell(0, 10, REPORT_TITLE, align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(4)

    pdf.set_font("Helvetica", size=12)
    if email:
        _write_line(pdf, _latin1(f"Email: {email}"))
    _write_line(pdf, _latin1(f"Scenario: {scenario_name or 'N/A'}"))
    pdf.ln(4)

    pdf.set_font("Helvetica", style="B", size=12)
    pdf.cell(0, 8, "Inputs", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", size=12)
    for label, value in _input_rows(inputs):
        _write_line(pdf, f"{label}: {value}")

    pdf.ln(4)
    pdf.set_font("Helvetica", style="B", size=12)
    pdf.cell(0, 8, "Results", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font("Helvetica", size=12)
    for label, value in _result_rows(result):
        _write_line(pdf, f"{label}: {value}")

    pdf.ln(6)
    pdf.set_font("Helvetica", style="I", size=10)
    _write_line(pdf, REPORT_FOOTER)

    output = pdf.output()
    if isinstance(output, (bytes, bytearray)):
        return bytes(output)
    return output.encode("latin1")


__all__ = ["REPORT_FOOTER", "REPORT_TITLE", "format_amount", "render_pdf"]
