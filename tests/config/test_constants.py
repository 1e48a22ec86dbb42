"""Unit coverage for loading the simulation constants."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from invoiceroi.backend.config import constants
from invoiceroi.backend.config.schema import ConfigurationError, SimulationConstants


@pytest.fixture()
def constants_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Return a temporary constants file patched into the loader."""

    path = tmp_path / "constants.yaml"
    path.write_text((constants.CONSTANTS_FILE).read_text(encoding="utf-8"), encoding="utf-8")

    monkeypatch.setattr(constants, "CONSTANTS_FILE", path)
    constants.load_constants.cache_clear()

    yield path

    constants.load_constants.cache_clear()


def test_packaged_constants_match_business_defaults() -> None:
    constants.load_constants.cache_clear()
    loaded = constants.load_constants()

    assert loaded.automated_cost_per_invoice == pytest.approx(0.20)
    assert loaded.error_rate_auto == pytest.approx(0.001)
    assert loaded.min_roi_boost_factor == pytest.approx(1.1)
    assert loaded == SimulationConstants()


def test_constants_are_immutable() -> None:
    loaded = SimulationConstants()

    with pytest.raises(ValidationError):
        loaded.min_roi_boost_factor = 2.0  # type: ignore[misc]


def test_load_constants_is_cached(constants_file: Path) -> None:
    assert constants.load_constants() is constants.load_constants()


def test_load_constants_reads_overrides(constants_file: Path) -> None:
    constants_file.write_text(
        "automated_cost_per_invoice: 0.35\nerror_rate_auto: 0.002\nmin_roi_boost_factor: 1.0\n",
        encoding="utf-8",
    )

    loaded = constants.load_constants()

    assert loaded.automated_cost_per_invoice == pytest.approx(0.35)
    assert loaded.min_roi_boost_factor == pytest.approx(1.0)


@pytest.mark.parametrize(
    "content",
    [
        "automated_cost_per_invoice: -1\n",
        "error_rate_auto: 1.5\n",
        "min_roi_boost_factor: 0\n",
        "unexpected_key: 3\n",
        "- just\n- a list\n",
    ],
)
def test_load_constants_rejects_invalid_files(constants_file: Path, content: str) -> None:
    constants_file.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        constants.load_constants()


def test_missing_constants_file(constants_file: Path) -> None:
    constants_file.unlink()

    with pytest.raises(FileNotFoundError):
        constants.load_constants()
