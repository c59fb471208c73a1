"""
Version lookup for lambda-graphql.

A source checkout reads ``[project].version`` from the repository's
pyproject.toml, so the CLI reports the version being edited rather than a
stale installed one. Otherwise the installed distribution metadata is used.
"""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "lambda-graphql"
UNKNOWN_VERSION = "0.0.0"

PYPROJECT_PATH = Path(__file__).resolve().parents[2] / "pyproject.toml"


def read_project_version(pyproject: Path) -> str | None:
    """
    Return ``[project].version`` when ``pyproject`` describes this distribution.

    A pyproject.toml belonging to some other project, or one that cannot be
    parsed, yields None.
    """
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return None

    project = data.get("project", {})
    if project.get("name") != DISTRIBUTION_NAME:
        return None
    value = project.get("version")
    return value if isinstance(value, str) else None


def get_version() -> str:
    """Get version from pyproject.toml (source checkout) or package metadata (installed)."""
    if (found := read_project_version(PYPROJECT_PATH)) is not None:
        return found
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
