"""HTTP helper utilities shared across Flask blueprints."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Mapping

from flask import jsonify


@dataclass(frozen=True)
class ProblemResponse:
    """Error payload in the spirit of RFC 7807, rendered as JSON."""

    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] | None = None

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error}
        if self.message:
            payload["message"] = self.message
        if self.extra:
            payload.update(self.extra)
        return payload

    def to_response(self) -> tuple[Any, int]:
        """Convert the problem payload into a Flask response tuple."""

        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    """Build a :class:`ProblemResponse`; extra keywords are merged into the body."""

    additional: Mapping[str, Any] | None = extra or None
    return ProblemResponse(error=error, status=status, message=message, extra=additional)


def scenario_not_found(scenario_id: int) -> ProblemResponse:
    """Problem payload for a scenario id with no stored record."""

    return problem_response(
        "not_found",
        status=HTTPStatus.NOT_FOUND,
        message=f"Scenario {scenario_id} not found",
    )


__all__ = ["ProblemResponse", "problem_response", "scenario_not_found"]
