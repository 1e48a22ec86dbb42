"""Blueprint registrations for application routes."""

from flask import Flask

from .reports import blueprint as reports_blueprint
from .scenarios import blueprint as scenarios_blueprint
from .simulations import blueprint as simulations_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(simulations_blueprint)
    app.register_blueprint(scenarios_blueprint)
    app.register_blueprint(reports_blueprint)
