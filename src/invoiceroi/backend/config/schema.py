"""Pydantic models describing the simulation constants schema."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class SimulationConstants(ImmutableModel):
    """Fixed business assumptions applied to every ROI simulation.

    The values are not exposed to API callers; they are loaded once from the
    packaged YAML file and injected into the calculation engine.
    """

    automated_cost_per_invoice: float = 0.20
    error_rate_auto: float = 0.001
    min_roi_boost_factor: float = 1.1

    @model_validator(mode="after")
    def _validate_values(self) -> SimulationConstants:
        if self.automated_cost_per_invoice < 0:
            raise ConfigurationError("Automated cost per invoice must be non-negative")
        if not 0 <= self.error_rate_auto <= 1:
            raise ConfigurationError(
                "Automated error rate must be a decimal between 0 and 1"
            )
        if self.min_roi_boost_factor <= 0:
            raise ConfigurationError("ROI boost factor must be positive")
        return self


__all__ = [
    "ConfigurationError",
    "ImmutableModel",
    "SimulationConstants",
    "ValidationError",
]
