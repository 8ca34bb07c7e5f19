"""
Global test configuration for booktracker.

This module provides global pytest configuration and fixtures.
"""

import sys
from pathlib import Path

import pytest

# Ensure the project src directory is importable without relying on external environment.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from booktracker.infra.audit import AuditLog  # noqa: E402
from booktracker.infra.logging import configure_logging  # noqa: E402

configure_logging()


@pytest.fixture
def write_catalog(tmp_path):
    """Write lines to ``tmp_path/books.txt`` and return the path."""

    def _write(*lines: str, name: str = "books.txt") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def audit(tmp_path):
    """Audit sink writing to ``tmp_path/errors.log``."""
    return AuditLog(tmp_path / "errors.log")
