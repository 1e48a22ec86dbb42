"""Typed request/response models shared across the simulation services.

Inputs are Pydantic models so that sanitisation happens in one place for the
routes, the report exporter, and the scenario store. Derived results are plain
frozen dataclasses produced by the calculation engine.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from .api import (
    DEFAULT_SCENARIO_NAME,
    DEFAULT_TIME_HORIZON_MONTHS,
    SCENARIO_INPUT_FIELDS,
    ReportRequest,
    ScenarioInput,
    ScenarioRequest,
    format_validation_error,
    safe_number,
)

__all__ = [
    "DEFAULT_SCENARIO_NAME",
    "DEFAULT_TIME_HORIZON_MONTHS",
    "RESULT_FIELDS",
    "SCENARIO_INPUT_FIELDS",
    "ReportRequest",
    "ScenarioInput",
    "ScenarioRequest",
    "SimulationResult",
    "format_validation_error",
    "json_safe_number",
    "safe_number",
]


RESULT_FIELDS: tuple[str, ...] = (
    "monthly_savings",
    "cumulative_savings",
    "net_savings",
    "payback_months",
    "roi_percentage",
)


def json_safe_number(value: float) -> float | None:
    """Return ``value`` unchanged when finite, otherwise ``None``."""

    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class SimulationResult:
    """Derived savings metrics, rounded to two decimals."""

    monthly_savings: float
    cumulative_savings: float
    net_savings: float
    payback_months: float
    roi_percentage: float

    @property
    def roi_defined(self) -> bool:
        """ROI is undefined (infinite) when there was no upfront cost."""

        return math.isfinite(self.roi_percentage)

    def as_dict(self) -> dict[str, float]:
        """Return the raw metric values, including any infinities."""

        return {field: getattr(self, field) for field in RESULT_FIELDS}

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-serialisable payload with non-finite values as ``None``."""

        payload: dict[str, Any] = {
            field: json_safe_number(value) for field, value in self.as_dict().items()
        }
        payload["roi_defined"] = self.roi_defined
        return payload
