"""Dataset generator configuration."""

from .loader import load_config, parse_config_mapping
from .models import (
    Branch,
    ConfigTree,
    DatasetSpec,
    GeneratorParams,
    Leaf,
    LeafPath,
    MockConfig,
)
from .periods import Granularity, parse_period, parse_timezone

__all__ = [
    "Branch",
    "ConfigTree",
    "DatasetSpec",
    "GeneratorParams",
    "Granularity",
    "Leaf",
    "LeafPath",
    "MockConfig",
    "load_config",
    "parse_config_mapping",
    "parse_period",
    "parse_timezone",
]
