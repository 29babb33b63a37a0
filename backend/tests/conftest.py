"""Pytest configuration and shared fixtures."""
import json
from pathlib import Path
from typing import Any, Callable

import pytest

from portal_analytics.logging import setup_logging
from portal_analytics.profiles import HACKATHON
from portal_analytics.schemas.profile import DashboardProfile
from tests.utils.factories import SnapshotFactory


@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> None:
    """Configure structlog once before any logger is used."""
    setup_logging("WARNING")


@pytest.fixture
def profile() -> DashboardProfile:
    """The default dashboard profile."""
    return HACKATHON


@pytest.fixture
def snapshot() -> dict[str, Any]:
    """
    A snapshot that passes both structure and quality validation.

    Returns:
        dict: Snapshot data
    """
    return SnapshotFactory.create()


@pytest.fixture
def write_snapshot(tmp_path: Path) -> Callable[..., Path]:
    """
    Write snapshot content into a temporary directory.

    Accepts either a dict (serialised as JSON) or raw text.
    """

    def write(content: Any, name: str = "test_ver11.json") -> Path:
        path = tmp_path / name
        text = content if isinstance(content, str) else json.dumps(content)
        path.write_text(text, encoding="utf-8")
        return path

    return write
