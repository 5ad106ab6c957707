"""Shared pytest fixtures for restlang tests."""

from pathlib import Path

import pytest

from restlang.core import ir
from restlang.core.parser import parse_file


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def api_fixtures_dir(fixtures_dir: Path) -> Path:
    """Return path to .api source fixtures."""
    return fixtures_dir / "api"


@pytest.fixture
def todo_document(api_fixtures_dir: Path) -> ir.Document:
    """Return the compiled todo example."""
    return parse_file(api_fixtures_dir / "todo.api")


@pytest.fixture
def simple_source() -> str:
    """Return a minimal resource with one method and one route parameter."""
    return "/todo\n#GET\n:id int64 required\n"
