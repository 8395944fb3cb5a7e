"""Shared fixtures for integration tests."""

import os
from pathlib import Path

import pytest

MOCK_CONFIG_YAML = """
datasets:
  web:
    timezone: America/Los_Angeles
    granularity: 1hour
    dimensions: [region, device]
    metrics:
      views:
        us:
          mobile: {mean: 120, std: 15}
          desktop: {mean: 80, std: 10}
        eu:
          mobile: {mean: 60, std: 8}
      signups:
        us:
          desktop: {mean: 4, std: 2}
  billing:
    timezone: UTC
    granularity: 1day
    dimensions: [plan]
    metrics:
      revenue:
        free: {mean: 0, std: 0}
        pro: {mean: 2500, std: 300}
"""


# Ensure DAGSTER_HOME points to a temp path for all tests
@pytest.fixture(scope="session", autouse=True)
def _dagster_home_env(tmp_path_factory):
    tmp_home = tmp_path_factory.mktemp("dagster_home")
    os.environ["DAGSTER_HOME"] = str(tmp_home)
    return str(tmp_home)


@pytest.fixture
def mock_config_file(tmp_path: Path) -> Path:
    path = tmp_path / "mock_datasets.yaml"
    path.write_text(MOCK_CONFIG_YAML, encoding="utf-8")
    return path
