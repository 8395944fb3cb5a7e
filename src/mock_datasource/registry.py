"""Build-once registry of generated mock datasets.

A :class:`Registry` is produced by a single :func:`build_registry` call and is
never mutated afterwards, so it can be shared freely between readers and
several independently configured registries can live in one process.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

import numpy as np
import pandas as pd

from mock_datasource.config.models import DatasetSpec, GeneratorParams, LeafPath, MockConfig
from mock_datasource.constants import COL_TIME, DEFAULT_WINDOW_DAYS
from mock_datasource.generation.frames import assemble_metric_frame
from mock_datasource.generation.merge import merge_dataset
from mock_datasource.generation.series import make_series
from mock_datasource.generation.tuples import filter_tuples, make_tuples, resolve_tuple
from mock_datasource.utils.errors import Err, MockDataError

LOG = logging.getLogger(__name__)

MS_PER_DAY = 24 * 60 * 60 * 1000


@dataclass(frozen=True)
class _LeafJob:
    dataset: DatasetSpec
    path: LeafPath
    params: GeneratorParams
    seed: np.random.SeedSequence


@dataclass(frozen=True)
class Registry:
    """Read-only view over every generated dataset table."""

    tables: Mapping[str, pd.DataFrame]
    dimensions: Mapping[str, tuple[str, ...]]
    metric_names: Mapping[int, str]
    metric_ids: Mapping[tuple[str, str], int]
    start_ms: int
    end_ms: int

    def _table(self, dataset: str) -> pd.DataFrame:
        try:
            return self.tables[dataset]
        except KeyError:
            raise MockDataError(Err.NOT_FOUND, ctx={"dataset": dataset}) from None

    def resolve(self, dataset: str) -> pd.DataFrame:
        """Return a copy of the dataset table so callers cannot alter shared state."""
        return self._table(dataset).copy()

    def list_datasets(self) -> list[str]:
        return sorted(self.tables)

    def metric_name(self, metric_id: int) -> str:
        try:
            return self.metric_names[metric_id]
        except KeyError:
            raise MockDataError(Err.NOT_FOUND, ctx={"metric_id": metric_id}) from None

    def metric_id(self, dataset: str, metric: str) -> int:
        try:
            return self.metric_ids[(dataset, metric)]
        except KeyError:
            raise MockDataError(
                Err.NOT_FOUND, ctx={"dataset": dataset, "metric": metric}
            ) from None

    def max_data_time(self, dataset: str) -> int | None:
        table = self._table(dataset)
        if table.empty:
            return None
        return int(table.index.get_level_values(COL_TIME).max())

    def dimension_filters(self, dataset: str) -> dict[str, list[str]]:
        table = self._table(dataset)
        return {
            dim: sorted(set(table.index.get_level_values(dim)))
            for dim in self.dimensions[dataset]
        }


def current_time_ms() -> int:
    return pd.Timestamp.now(tz="UTC").value // 1_000_000


def _default_window(start_ms: int | None, end_ms: int | None) -> tuple[int, int]:
    if end_ms is None:
        end_ms = current_time_ms()
    if start_ms is None:
        start_ms = end_ms - DEFAULT_WINDOW_DAYS * MS_PER_DAY
    return int(start_ms), int(end_ms)


def _plan_leaves(config: MockConfig) -> list[tuple[LeafPath, GeneratorParams, DatasetSpec]]:
    plan: list[tuple[LeafPath, GeneratorParams, DatasetSpec]] = []
    for name in sorted(config.datasets):
        dataset = config.datasets[name]
        for metric in sorted(dataset.metrics):
            tree = dataset.metrics[metric]
            prefix = dataset.base_prefix(metric)
            for path in sorted(make_tuples(tree, prefix, dataset.max_depth)):
                plan.append((path, resolve_tuple(tree, path, len(prefix)), dataset))
    return plan


def _synthesize(job: _LeafJob, start_ms: int, end_ms: int) -> pd.DataFrame:
    LOG.debug("Generating '%s'", "/".join(job.path))
    return make_series(
        job.params,
        start_ms,
        end_ms,
        job.dataset.granularity,
        job.dataset.timezone,
        rng=np.random.default_rng(job.seed),
    )


def build_registry(
    config: MockConfig,
    *,
    start_ms: int | None = None,
    end_ms: int | None = None,
    seed: int | None = None,
    max_workers: int | None = None,
) -> Registry:
    """Generate every dataset in ``config`` and return the finished registry.

    Leaf series may be synthesized on a thread pool; metric id assignment and
    the merge fold always run in sorted (dataset, metric) order. Each leaf
    draws from its own child of one ``SeedSequence``, so a given ``seed``
    yields the same values with or without a pool. Any error aborts the whole
    build.
    """

    start_ms, end_ms = _default_window(start_ms, end_ms)
    LOG.info("Found %d datasets: %s", len(config.datasets), sorted(config.datasets))
    LOG.info("Generating data for time range %d to %d", start_ms, end_ms)

    plan = _plan_leaves(config)
    seeds = np.random.SeedSequence(seed).spawn(len(plan))
    jobs = [
        _LeafJob(dataset=dataset, path=path, params=params, seed=child)
        for (path, params, dataset), child in zip(plan, seeds)
    ]

    if max_workers is not None and max_workers > 1 and len(jobs) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            generated = list(executor.map(lambda job: _synthesize(job, start_ms, end_ms), jobs))
    else:
        generated = [_synthesize(job, start_ms, end_ms) for job in jobs]

    raw_data: dict[LeafPath, pd.DataFrame] = {
        job.path: series for job, series in zip(jobs, generated)
    }

    tables: dict[str, pd.DataFrame] = {}
    dimensions: dict[str, tuple[str, ...]] = {}
    metric_names: dict[int, str] = {}
    metric_ids: dict[tuple[str, str], int] = {}
    counter = 0

    for name in sorted(config.datasets):
        dataset = config.datasets[name]
        metric_tables: dict[str, pd.DataFrame] = {}

        for metric in sorted(dataset.metrics):
            counter += 1
            metric_names[counter] = metric
            metric_ids[(name, metric)] = counter

            prefix = dataset.base_prefix(metric)
            leaves = [(path, raw_data[path]) for path in sorted(filter_tuples(raw_data, prefix))]
            metric_tables[metric] = assemble_metric_frame(metric, dataset.dimensions, leaves)

        table = merge_dataset(dataset.dimensions, list(dataset.metrics), metric_tables)
        tables[name] = table
        dimensions[name] = dataset.dimensions
        LOG.info(
            "Merged '%s' with %d rows and %d columns",
            name,
            len(table),
            len(table.columns) + table.index.nlevels,
        )

    return Registry(
        tables=MappingProxyType(tables),
        dimensions=MappingProxyType(dimensions),
        metric_names=MappingProxyType(metric_names),
        metric_ids=MappingProxyType(metric_ids),
        start_ms=start_ms,
        end_ms=end_ms,
    )
