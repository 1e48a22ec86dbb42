"""Pydantic models describing the public API surface."""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

__all__ = [
    "DEFAULT_SCENARIO_NAME",
    "DEFAULT_TIME_HORIZON_MONTHS",
    "SCENARIO_INPUT_FIELDS",
    "ScenarioInput",
    "ScenarioRequest",
    "ReportRequest",
    "safe_number",
    "format_validation_error",
]


DEFAULT_TIME_HORIZON_MONTHS = 36
DEFAULT_SCENARIO_NAME = "Untitled"
MAX_SCENARIO_NAME_LENGTH = 255


def safe_number(value: Any, default: float = 0.0) -> float:
    """Return ``value`` as a finite float, or ``default`` when that is impossible.

    Blank form values behave like zero: ``None`` and empty or whitespace-only
    strings give ``0.0`` and booleans give ``1.0``/``0.0``. Only values that are
    unreadable or non-finite fall back to ``default``.
    """

    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, str) and not value.strip():
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(number):
        return default
    return number


class ScenarioInput(BaseModel):
    """Business inputs describing the current manual invoicing process.

    Every field is optional. Values that cannot be read as finite numbers fall
    back to their defaults instead of failing validation, so any mapping can be
    turned into a usable input record. Unknown keys (such as ``scenario_name``
    or ``email`` sent alongside the inputs) are ignored.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    monthly_invoice_volume: float = 0.0
    num_ap_staff: float = 0.0
    avg_hours_per_invoice: float = 0.0
    hourly_wage: float = 0.0
    error_rate_manual: float = 0.0
    error_cost: float = 0.0
    time_horizon_months: int = DEFAULT_TIME_HORIZON_MONTHS
    one_time_implementation_cost: float = 0.0

    @field_validator(
        "monthly_invoice_volume",
        "num_ap_staff",
        "avg_hours_per_invoice",
        "hourly_wage",
        "error_rate_manual",
        "error_cost",
        "one_time_implementation_cost",
        mode="before",
    )
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        return safe_number(value, 0.0)

    @field_validator("time_horizon_months", mode="before")
    @classmethod
    def _coerce_horizon(cls, value: Any) -> int:
        months = math.floor(safe_number(value, DEFAULT_TIME_HORIZON_MONTHS))
        return max(1, months)


SCENARIO_INPUT_FIELDS: tuple[str, ...] = tuple(ScenarioInput.model_fields)


class ScenarioRequest(BaseModel):
    """Metadata submitted when saving a scenario."""

    model_config = ConfigDict(extra="ignore")

    scenario_name: str = Field(
        default=DEFAULT_SCENARIO_NAME, max_length=MAX_SCENARIO_NAME_LENGTH
    )

    @field_validator("scenario_name", mode="before")
    @classmethod
    def _normalise_name(cls, value: Any) -> str:
        if value is None:
            return DEFAULT_SCENARIO_NAME
        name = str(value).strip()
        return name or DEFAULT_SCENARIO_NAME


class ReportRequest(BaseModel):
    """Metadata required to produce a downloadable report."""

    model_config = ConfigDict(extra="ignore")

    email: str
    scenario_name: str | None = Field(default=None, max_length=MAX_SCENARIO_NAME_LENGTH)

    @field_validator("email", mode="before")
    @classmethod
    def _validate_email(cls, value: Any) -> str:
        if not isinstance(value, str) or "@" not in value:
            raise ValueError("a valid email address is required")
        return value.strip()

    @field_validator("scenario_name", mode="before")
    @classmethod
    def _normalise_name(cls, value: Any) -> str | None:
        if value is None:
            return None
        name = str(value).strip()
        return name or None


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid request payload: {details}"
