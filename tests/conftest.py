"""
fruently Test Configuration

Shared pytest fixtures and configuration for all test types.
"""

import os
from pathlib import Path
from typing import Generator

import pytest
import yaml

from fruently.core.config import reset_settings
from fruently.core.models import Record


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")


@pytest.fixture(autouse=True)
def clean_settings() -> Generator[None, None, None]:
    """Reset settings singleton and FRUENTLY_ environment around each test."""
    reset_settings()
    for key in list(os.environ.keys()):
        if key.startswith("FRUENTLY_"):
            del os.environ[key]
    yield
    reset_settings()
    for key in list(os.environ.keys()):
        if key.startswith("FRUENTLY_"):
            del os.environ[key]


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Provide a temporary configuration directory for tests."""
    config_dir = tmp_path / ".fruently"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def write_config(test_config_dir: Path):
    """Factory fixture writing a config.yaml and returning its path."""
    def _write(data: dict) -> Path:
        path = test_config_dir / "config.yaml"
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def sample_records() -> list[Record]:
    """Provide a couple of records that failed delivery."""
    return [
        Record(tag="app.access", time=1735689600, record={"status": 200, "path": "/"}),
        Record(tag="app.error", time=1735689601, record={"message": "timeout"}),
    ]
