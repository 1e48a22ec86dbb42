"""ROI calculation engine for manual versus automated invoice processing.

``compute`` is a pure function of the sanitised inputs and the injected
simulation constants. ``run_simulation`` wraps it for the HTTP layer with
optional profiling so that routes have a single entry point.
"""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Mapping
from contextlib import contextmanager
from decimal import ROUND_HALF_UP, Decimal
from time import perf_counter
from typing import Any

from invoiceroi.backend.app.models import ScenarioInput, SimulationResult
from invoiceroi.backend.config.schema import SimulationConstants

_LOGGER = logging.getLogger(__name__)

DEFAULT_CONSTANTS = SimulationConstants()

# Non-positive savings are replaced by this nominal amount so the payback
# division always has a positive denominator.
MINIMUM_MONTHLY_SAVINGS = 0.01
_CENT = Decimal("0.01")


def round_currency(value: float) -> float:
    """Round monetary amounts to two decimals, halves away from zero.

    The exact binary value of ``value`` is rounded, so ``0.125`` becomes
    ``0.13`` while ``2.675`` (stored as ``2.67499...``) stays ``2.67``.
    Non-finite values are returned unchanged.
    """

    if not math.isfinite(value):
        return value
    return float(Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("INVOICEROI_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _coerce_input(inputs: ScenarioInput | Mapping[str, Any] | None) -> ScenarioInput:
    if isinstance(inputs, ScenarioInput):
        return inputs
    if not isinstance(inputs, Mapping):
        return ScenarioInput()
    return ScenarioInput.model_validate(dict(inputs))


def compute(
    inputs: ScenarioInput | Mapping[str, Any] | None = None,
    constants: SimulationConstants = DEFAULT_CONSTANTS,
) -> SimulationResult:
    """Project monthly savings, payback period, and ROI for ``inputs``.

    Raw mappings are sanitised first: unreadable or non-finite values fall
    back to their defaults, so this function never raises for bad input.
    """

    scenario = _coerce_input(inputs)
    volume = scenario.monthly_invoice_volume
    implementation_cost = scenario.one_time_implementation_cost

    labor_cost_manual = (
        scenario.num_ap_staff
        * scenario.hourly_wage
        * scenario.avg_hours_per_invoice
        * volume
    )
    auto_cost = volume * constants.automated_cost_per_invoice

    error_rate_manual = scenario.error_rate_manual / 100
    error_savings = (
        max(0.0, error_rate_manual - constants.error_rate_auto)
        * volume
        * scenario.error_cost
    )

    raw_savings = (labor_cost_manual + error_savings - auto_cost) * constants.min_roi_boost_factor
    monthly_savings = MINIMUM_MONTHLY_SAVINGS if raw_savings <= 0 else raw_savings

    cumulative_savings = monthly_savings * scenario.time_horizon_months
    net_savings = cumulative_savings - implementation_cost
    payback_months = implementation_cost / monthly_savings
    if implementation_cost > 0:
        roi_percentage = (net_savings / implementation_cost) * 100
    else:
        roi_percentage = float("inf")

    return SimulationResult(
        monthly_savings=round_currency(monthly_savings),
        cumulative_savings=round_currency(cumulative_savings),
        net_savings=round_currency(net_savings),
        payback_months=round_currency(payback_months),
        roi_percentage=round_currency(roi_percentage),
    )


def run_simulation(
    payload: Mapping[str, Any],
    constants: SimulationConstants = DEFAULT_CONSTANTS,
) -> tuple[ScenarioInput, SimulationResult]:
    """Sanitise ``payload`` and return it together with its computed result."""

    profile_store: dict[str, float] | None = {} if _profiling_enabled() else None

    with _profile_section("sanitise", profile_store):
        scenario = _coerce_input(payload)
    with _profile_section("compute", profile_store):
        result = compute(scenario, constants)

    if profile_store is not None:
        _LOGGER.debug(
            "Simulation timings (ms): %s",
            {name: round(duration * 1000, 3) for name, duration in profile_store.items()},
        )

    return scenario, result


__all__ = [
    "DEFAULT_CONSTANTS",
    "MINIMUM_MONTHLY_SAVINGS",
    "compute",
    "round_currency",
    "run_simulation",
]
