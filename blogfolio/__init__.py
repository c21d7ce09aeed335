"""Blogfolio content toolkit: markdown articles and videos for a static site."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as load_pkg_version
from pathlib import Path
import tomllib

from .content.repository import ContentRepository

__all__ = ["ContentRepository", "__version__"]


def _read_local_project_version() -> str:
    """Fall back to pyproject.toml when running from a source checkout."""
    pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return "0.0.0"
    return data.get("project", {}).get("version", "0.0.0")


try:
    __version__ = load_pkg_version("blogfolio")
except PackageNotFoundError:
    __version__ = _read_local_project_version()
