"""Data structures backing the generator configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Tuple, Union
from zoneinfo import ZoneInfo

from mock_datasource.config.periods import Granularity

# (dataset, "metrics", metric, dim_value_1, ..., dim_value_k)
LeafPath = Tuple[str, ...]

METRICS_SEGMENT = "metrics"


@dataclass(frozen=True)
class GeneratorParams:
    """Gaussian sampling parameters for one leaf series."""

    mean: float = 0.0
    std: float = 1.0


@dataclass(frozen=True)
class Leaf:
    params: GeneratorParams = field(default_factory=GeneratorParams)


@dataclass(frozen=True)
class Branch:
    """Maps a dimension value to the subtree below it."""

    children: Mapping[str, "ConfigTree"]


ConfigTree = Union[Branch, Leaf]


@dataclass(frozen=True)
class DatasetSpec:
    name: str
    timezone: ZoneInfo
    dimensions: Tuple[str, ...]
    granularity: Granularity
    metrics: Mapping[str, ConfigTree]

    def base_prefix(self, metric: str) -> LeafPath:
        return (self.name, METRICS_SEGMENT, metric)

    @property
    def max_depth(self) -> int:
        return 3 + len(self.dimensions)


@dataclass(frozen=True)
class MockConfig:
    """Top-level config bundle, one entry per dataset."""

    datasets: Mapping[str, DatasetSpec]
