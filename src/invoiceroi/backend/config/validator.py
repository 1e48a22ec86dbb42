"""Utilities for validating simulation constants and surfacing issues."""

from __future__ import annotations

import argparse
from typing import Sequence

from .constants import ConfigurationError, SimulationConstants, load_constants

# Automated error rates above this level usually indicate a percentage value
# entered where a decimal is expected.
_SUSPICIOUS_ERROR_RATE = 0.05


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def validate_constants(constants: SimulationConstants) -> list[str]:
    """Return human-readable issues detected in ``constants``."""

    errors: list[str] = []

    if constants.automated_cost_per_invoice == 0:
        errors.append(
            _format_scope(
                "automated_cost_per_invoice",
                "automation is modelled as free; confirm the per-invoice cost",
            )
        )

    if constants.error_rate_auto > _SUSPICIOUS_ERROR_RATE:
        errors.append(
            _format_scope(
                "error_rate_auto",
                f"value {constants.error_rate_auto} looks like a percentage; "
                "expected a decimal fraction",
            )
        )

    if constants.min_roi_boost_factor < 1:
        errors.append(
            _format_scope(
                "min_roi_boost_factor",
                "factor below 1 reduces projected savings",
            )
        )

    return errors


def _build_argument_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        description="Validate the simulation constants shipped with the ROI simulator."
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    parser.parse_args(argv)

    try:
        constants = load_constants()
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"[constants] failed to load configuration: {error}")
        return 1

    issues = validate_constants(constants)
    if issues:
        print(f"[constants] {len(issues)} issue(s) detected:")
        for issue in issues:
            print(f"  - {issue}")
        return 1

    print("[constants] OK")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
