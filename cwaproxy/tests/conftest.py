"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from cwaproxy.config.schema import ProxyConfig, UpstreamConfig

FIXTURE_DIR = Path(__file__).parent / "fixtures"
TEST_BASE_URL = "https://test-cwa.example.com/api"


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def taipei_payload() -> dict:
    with open(FIXTURE_DIR / "cwa_forecast_taipei.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def keyed_config() -> ProxyConfig:
    """Config with a test API key and a fake upstream base URL."""
    return ProxyConfig(
        upstream=UpstreamConfig(api_key="test-key-123", base_url=TEST_BASE_URL)
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "server": {"port": 8080, "environment": "staging"},
        "cache": {"ttl_seconds": 120},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
