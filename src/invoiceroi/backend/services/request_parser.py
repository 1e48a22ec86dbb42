"""Helpers for normalising incoming simulation requests."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from flask import Request
from pydantic import BaseModel, ValidationError
from werkzeug.exceptions import BadRequest

from invoiceroi.backend.app.models import format_validation_error

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_json_object(req: Request) -> dict[str, Any]:
    """Extract a JSON object payload from ``req``."""

    data = req.get_json(silent=True)
    if data is None:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, Mapping):
        raise BadRequest("Request JSON must be an object")

    return dict(data)


def parse_model(model: type[ModelT], payload: Mapping[str, Any]) -> ModelT:
    """Validate ``payload`` against ``model``, raising ``ValueError`` on failure."""

    try:
        return model.model_validate(dict(payload))
    except ValidationError as error:
        raise ValueError(format_validation_error(error)) from error


def parse_scenario_id(raw: str) -> int:
    """Return ``raw`` as a scenario id, rejecting anything but an integer."""

    try:
        return int(raw.strip())
    except ValueError:
        raise BadRequest("Invalid id") from None
