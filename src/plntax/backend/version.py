"""Resolve the PLNTax release version for health and metadata endpoints."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "plntax"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed distribution version, else the ``pyproject.toml`` one."""

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return _read_version_from_pyproject(PYPROJECT_PATH)


def _read_version_from_pyproject(path: Path) -> str:
    """Read ``project.version`` from a source checkout."""

    if not path.exists():  # pragma: no cover - repository invariant
        raise RuntimeError(f"Unable to locate project metadata at {path}")

    with path.open("rb") as handle:
        document = tomllib.load(handle)

    version = document.get("project", {}).get("version")
    if not version:
        raise RuntimeError("Unable to determine project version from pyproject.toml")
    return str(version)


__all__ = ["get_project_version"]
