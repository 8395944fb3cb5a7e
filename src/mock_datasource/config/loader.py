"""Config loader for mock datasets."""

from __future__ import annotations

import json
import math
from collections import OrderedDict
from pathlib import Path
from typing import Any, Mapping

import yaml

from mock_datasource.config.models import (
    Branch,
    ConfigTree,
    DatasetSpec,
    GeneratorParams,
    Leaf,
    MockConfig,
)
from mock_datasource.config.periods import (
    DEFAULT_GRANULARITY,
    DEFAULT_TIMEZONE,
    parse_period,
    parse_timezone,
)
from mock_datasource.constants import COL_TIME
from mock_datasource.utils.errors import Err, MockDataError


def _load_mapping(data: Any, *, path: Path) -> Mapping[str, Any]:
    if isinstance(data, Mapping):
        return data
    raise MockDataError(
        Err.CONFIG_MALFORMED,
        ctx={"path": str(path), "error": "top-level must be mapping"},
    )


def _parse_file(path: Path) -> Mapping[str, Any]:
    suffix = path.suffix.lower()
    raw = path.read_text(encoding="utf-8")
    if suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(raw)
        return _load_mapping(data or {}, path=path)
    if suffix == ".json":
        data = json.loads(raw)
        return _load_mapping(data, path=path)
    raise MockDataError(
        Err.CONFIG_MALFORMED,
        ctx={"path": str(path), "error": f"unsupported config format {suffix!r}"},
    )


def load_config(path: Path | str) -> MockConfig:
    """Load a YAML or JSON config file into a :class:`MockConfig`."""

    config_path = Path(path)
    if not config_path.is_file():
        raise MockDataError(
            Err.CONFIG_MALFORMED,
            ctx={"path": str(config_path), "error": "config file missing"},
        )
    return parse_config_mapping(_parse_file(config_path), source=config_path)


def parse_config_mapping(
    data: Mapping[str, Any],
    *,
    source: Path | str | None = None,
) -> MockConfig:
    """Validate a raw ``{"datasets": {...}}`` mapping.

    Every metric tree is checked against the dataset's declared dimensions
    here, so later stages can rely on the tagged tree shape.
    """

    where = str(source) if source is not None else "<mapping>"
    if not isinstance(data, Mapping):
        raise MockDataError(
            Err.CONFIG_MALFORMED,
            ctx={"path": where, "error": "top-level must be mapping"},
        )

    section = data.get("datasets")
    if not isinstance(section, Mapping):
        raise MockDataError(
            Err.CONFIG_MALFORMED,
            ctx={"path": where, "error": "datasets must be mapping"},
        )

    datasets: OrderedDict[str, DatasetSpec] = OrderedDict()
    for name, payload in section.items():
        datasets[str(name)] = _parse_dataset(str(name), payload, where=where)
    return MockConfig(datasets=datasets)


def _parse_dataset(name: str, payload: Any, *, where: str) -> DatasetSpec:
    if not isinstance(payload, Mapping):
        raise MockDataError(
            Err.CONFIG_MALFORMED,
            ctx={"path": where, "dataset": name, "error": "dataset must be mapping"},
        )

    dimensions = _parse_dimensions(name, payload.get("dimensions"), where=where)
    timezone = parse_timezone(payload.get("timezone", DEFAULT_TIMEZONE))
    granularity = parse_period(payload.get("granularity", DEFAULT_GRANULARITY))

    metrics_section = payload.get("metrics")
    if not isinstance(metrics_section, Mapping):
        raise MockDataError(
            Err.CONFIG_MALFORMED,
            ctx={"path": where, "dataset": name, "error": "metrics must be mapping"},
        )

    metrics: OrderedDict[str, ConfigTree] = OrderedDict()
    for metric, tree in metrics_section.items():
        metric = str(metric)
        if metric == COL_TIME or metric in dimensions:
            raise MockDataError(
                Err.CONFIG_MALFORMED,
                ctx={
                    "path": where,
                    "dataset": name,
                    "metric": metric,
                    "error": "metric name collides with key column",
                },
            )
        metrics[metric] = _parse_tree(
            tree,
            depth=len(dimensions),
            trail=(name, "metrics", metric),
            where=where,
        )

    return DatasetSpec(
        name=name,
        timezone=timezone,
        dimensions=dimensions,
        granularity=granularity,
        metrics=metrics,
    )


def _parse_dimensions(dataset: str, raw: Any, *, where: str) -> tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list) or not all(isinstance(d, str) for d in raw):
        raise MockDataError(
            Err.CONFIG_MALFORMED,
            ctx={"path": where, "dataset": dataset, "error": "dimensions must be list of strings"},
        )
    if len(set(raw)) != len(raw) or COL_TIME in raw:
        raise MockDataError(
            Err.CONFIG_MALFORMED,
            ctx={"path": where, "dataset": dataset, "error": "dimension names must be unique"},
        )
    return tuple(raw)


def _parse_tree(node: Any, *, depth: int, trail: tuple[str, ...], where: str) -> ConfigTree:
    if depth == 0:
        return Leaf(_parse_params(node, trail=trail, where=where))

    if not isinstance(node, Mapping):
        raise MockDataError(
            Err.CONFIG_MALFORMED,
            ctx={"path": where, "node": "/".join(trail), "error": "expected dimension branch"},
        )

    children: OrderedDict[str, ConfigTree] = OrderedDict()
    for key, child in node.items():
        value = str(key)
        if value in children:
            raise MockDataError(
                Err.CONFIG_MALFORMED,
                ctx={"path": where, "node": "/".join(trail), "error": f"duplicate dimension value {value!r}"},
            )
        children[value] = _parse_tree(child, depth=depth - 1, trail=trail + (value,), where=where)
    return Branch(children=children)


def _parse_params(node: Any, *, trail: tuple[str, ...], where: str) -> GeneratorParams:
    if node is None:
        return GeneratorParams()
    if not isinstance(node, Mapping):
        raise MockDataError(
            Err.CONFIG_MALFORMED,
            ctx={"path": where, "node": "/".join(trail), "error": "expected generator mapping"},
        )

    mean = _as_float(node.get("mean", 0.0), field="mean", trail=trail, where=where)
    std = _as_float(node.get("std", 1.0), field="std", trail=trail, where=where)
    if std < 0:
        raise MockDataError(
            Err.CONFIG_MALFORMED,
            ctx={"path": where, "node": "/".join(trail), "error": "std must be non-negative"},
        )
    return GeneratorParams(mean=mean, std=std)


def _as_float(value: Any, *, field: str, trail: tuple[str, ...], where: str) -> float:
    ctx = {"path": where, "node": "/".join(trail), "error": f"{field} must be numeric"}
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise MockDataError(Err.CONFIG_MALFORMED, ctx=ctx)
    try:
        result = float(value)
    except ValueError as exc:
        raise MockDataError(Err.CONFIG_MALFORMED, ctx=ctx, cause=exc)
    if math.isnan(result):
        raise MockDataError(Err.CONFIG_MALFORMED, ctx=ctx)
    return result
