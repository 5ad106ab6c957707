"""Version lookup for restlang."""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Get the installed version, else the one declared by a source checkout."""
    try:
        return _metadata_version("restlang")
    except PackageNotFoundError:
        pass

    try:
        project = tomllib.loads(_PYPROJECT.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError):
        return "0.0.0"
    return str(project.get("project", {}).get("version", "0.0.0"))
