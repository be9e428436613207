"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from tenki.config.defaults import DEFAULT_REGIONS
from tenki.config.schema import AppConfig

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def osaka_feed_text() -> str:
    return (FIXTURE_DIR / "jma_forecast_osaka.json").read_text(encoding="utf-8")


@pytest.fixture
def weekly_feed_text() -> str:
    return (FIXTURE_DIR / "jma_forecast_weekly.json").read_text(encoding="utf-8")


@pytest.fixture
def default_config() -> AppConfig:
    """Return default AppConfig with default regions."""
    return AppConfig(regions=DEFAULT_REGIONS)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "region": "tokyo",
        "render": {"placeholder": "--", "short_range_slots": 2},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f)
    return path
