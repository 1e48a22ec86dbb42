"""Unit coverage for the project version helper."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path

import pytest

from invoiceroi.backend.version import (
    PYPROJECT_PATH,
    get_project_version,
    read_pyproject_version,
)


def test_pyproject_path_points_at_repository_root() -> None:
    assert PYPROJECT_PATH == Path(__file__).resolve().parents[2] / "pyproject.toml"


def test_get_project_version_prefers_package_metadata(monkeypatch: pytest.MonkeyPatch) -> None:
    get_project_version.cache_clear()
    monkeypatch.setattr(metadata, "version", lambda package: "9.9.9")

    assert get_project_version() == "9.9.9"
    get_project_version.cache_clear()


def test_get_project_version_falls_back_to_pyproject(monkeypatch: pytest.MonkeyPatch) -> None:
    get_project_version.cache_clear()

    def raise_package_not_found(_: str) -> str:
        raise metadata.PackageNotFoundError

    monkeypatch.setattr(metadata, "version", raise_package_not_found)

    assert get_project_version() == read_pyproject_version(PYPROJECT_PATH)
    get_project_version.cache_clear()


def test_read_pyproject_version_requires_version(tmp_path: Path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "demo"\n', encoding="utf-8")

    with pytest.raises(RuntimeError):
        read_pyproject_version(pyproject)
