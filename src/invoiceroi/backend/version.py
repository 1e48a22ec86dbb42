"""Expose the installed project version."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "invoice-roi-simulator"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the packaged version, reading ``pyproject.toml`` for source checkouts."""

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return read_pyproject_version(PYPROJECT_PATH)


def read_pyproject_version(path: Path) -> str:
    """Return ``project.version`` declared in the TOML file at ``path``."""

    if not path.exists():  # pragma: no cover - repository invariant
        raise RuntimeError(f"Unable to locate project metadata at {path}")

    with path.open("rb") as handle:
        document = tomllib.load(handle)

    version = document.get("project", {}).get("version")
    if not version:
        raise RuntimeError("Unable to determine project version from pyproject.toml")
    return str(version)


__all__ = ["PYPROJECT_PATH", "get_project_version", "read_pyproject_version"]
