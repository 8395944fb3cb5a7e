from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from dagster import ConfigurableResource
from pydantic import Field, PrivateAttr

from mock_datasource.config import MockConfig, load_config, parse_config_mapping
from mock_datasource.constants import DEFAULT_WINDOW_DAYS
from mock_datasource.registry import MS_PER_DAY, Registry, build_registry, current_time_ms
from mock_datasource.utils.errors import Err, MockDataError


class MockDataSourceResource(ConfigurableResource):
    """Resource that builds the mock dataset registry once and caches it.

    Attributes:
        config_path: YAML or JSON file with the ``datasets`` section.
        window_days: Length of the generated window, ending at build time.
        end_ms: Fixed window end (epoch millis); None means "now".
        seed: Optional seed for reproducible values.
        max_workers: Thread pool size for leaf synthesis (None = sequential).
    """

    config_path: str | None = None
    window_days: int = Field(default=DEFAULT_WINDOW_DAYS, gt=0)
    end_ms: int | None = None
    seed: int | None = None
    max_workers: int | None = None

    _registry_cache: dict[str, Registry] = PrivateAttr(default_factory=dict)

    def load(self) -> MockConfig:
        if self.config_path is None:
            raise MockDataError(
                Err.CONFIG_MALFORMED,
                ctx={"error": "config_path must be set to load a mock datasource config"},
            )
        return load_config(Path(self.config_path))

    def build(self, mapping: Mapping[str, Any] | None = None) -> Registry:
        config = parse_config_mapping(mapping) if mapping is not None else self.load()
        end_ms = self.end_ms if self.end_ms is not None else current_time_ms()
        return build_registry(
            config,
            start_ms=end_ms - self.window_days * MS_PER_DAY,
            end_ms=end_ms,
            seed=self.seed,
            max_workers=self.max_workers,
        )

    def get_registry(self) -> Registry:
        registry = self._registry_cache.get("default")
        if registry is None:
            registry = self.build()
            self._registry_cache["default"] = registry
        return registry


__all__ = [
    "MockDataSourceResource",
]
