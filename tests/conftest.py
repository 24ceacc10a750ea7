# tests/conftest.py

"""Shared pytest fixtures for the market_watch tests."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def mock_sleep() -> Generator[None, None, None]:
    """Patch time.sleep globally so client retries run instantly."""
    with patch("time.sleep"):
        yield


@pytest.fixture(autouse=True)
def isolated_logs_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Keep per-run log files out of the working tree."""
    logs_dir = tmp_path / "logs"
    with patch.object(Settings, "LOGS_DIR", logs_dir):
        yield logs_dir
