"""Configuration loader for the simulation constants."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import ConfigurationError, SimulationConstants

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
CONSTANTS_FILE = CONFIG_DIRECTORY / "constants.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


@lru_cache(maxsize=1)
def load_constants() -> SimulationConstants:
    """Load and cache the simulation constants from disk."""

    if not CONSTANTS_FILE.exists():
        raise FileNotFoundError(f"Simulation constants missing: {CONSTANTS_FILE.name}")

    raw_constants = _load_yaml(CONSTANTS_FILE)

    try:
        return SimulationConstants.model_validate(raw_constants)
    except ValidationError as error:
        raise ConfigurationError(f"Constants validation failed: {error}") from error


__all__ = [
    "CONFIG_DIRECTORY",
    "CONSTANTS_FILE",
    "ConfigurationError",
    "SimulationConstants",
    "load_constants",
]
