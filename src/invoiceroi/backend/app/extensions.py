"""Per-application collaborators stored on ``Flask.extensions``."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from flask import Flask, current_app

from invoiceroi.backend.app.services.scenario_store import (
    InMemoryScenarioRepository,
    ScenarioRepository,
    SQLiteScenarioRepository,
)
from invoiceroi.backend.config.constants import SimulationConstants, load_constants

logger = logging.getLogger(__name__)

REPOSITORY_KEY = "invoiceroi.scenario_repository"
CONSTANTS_KEY = "invoiceroi.simulation_constants"


def _parse_positive_int(value: str | None, *, env: str) -> int | None:
    if value is None or not value.strip():
        return None
    try:
        parsed = int(value)
    except ValueError:
        logger.warning("Ignoring invalid value for %s: %s", env, value)
        return None
    if parsed <= 0:
        logger.warning("Ignoring non-positive value for %s: %s", env, value)
        return None
    return parsed


def build_repository() -> ScenarioRepository:
    """Create the scenario repository described by the environment."""

    capacity = _parse_positive_int(
        os.getenv("INVOICEROI_SCENARIO_CAPACITY"), env="INVOICEROI_SCENARIO_CAPACITY"
    )

    db_path = os.getenv("INVOICEROI_SCENARIO_DB")
    if db_path:
        logger.info("Persisting scenarios to %s", db_path)
        return SQLiteScenarioRepository(Path(db_path).expanduser(), max_items=capacity)

    return InMemoryScenarioRepository(max_items=capacity)


def init_app(
    app: Flask,
    *,
    repository: ScenarioRepository | None = None,
    constants: SimulationConstants | None = None,
) -> None:
    """Attach the scenario repository and simulation constants to ``app``."""

    app.extensions[REPOSITORY_KEY] = repository if repository is not None else build_repository()
    app.extensions[CONSTANTS_KEY] = constants if constants is not None else load_constants()


def get_repository() -> ScenarioRepository:
    """Return the scenario repository bound to the current application."""

    return current_app.extensions[REPOSITORY_KEY]


def get_constants() -> SimulationConstants:
    """Return the simulation constants bound to the current application."""

    return current_app.extensions[CONSTANTS_KEY]
