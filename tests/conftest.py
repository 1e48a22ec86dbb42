"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from invoiceroi.backend.app import create_app  # noqa: E402
from invoiceroi.backend.app.services.scenario_store import (  # noqa: E402
    InMemoryScenarioRepository,
)

CONCRETE_SCENARIO = {
    "monthly_invoice_volume": 2000,
    "num_ap_staff": 3,
    "avg_hours_per_invoice": 0.17,
    "hourly_wage": 25,
    "error_rate_manual": 0.5,
    "error_cost": 100,
    "time_horizon_months": 36,
    "one_time_implementation_cost": 50000,
}


@pytest.fixture()
def concrete_scenario() -> dict[str, float]:
    """Reference inputs with hand-checked results."""

    return dict(CONCRETE_SCENARIO)


@pytest.fixture()
def app(monkeypatch: pytest.MonkeyPatch) -> Flask:
    """Return a configured Flask application backed by an in-memory store."""

    monkeypatch.delenv("INVOICEROI_SCENARIO_DB", raising=False)
    application = create_app(repository=InMemoryScenarioRepository())
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()
