"""Outer-join fold of per-metric tables into one wide dataset table."""

from __future__ import annotations

from typing import Mapping, Sequence

import pandas as pd

from mock_datasource.constants import COL_TIME
from mock_datasource.generation.frames import index_columns


def empty_dataset_frame(dimensions: Sequence[str], metrics: Sequence[str]) -> pd.DataFrame:
    frame = pd.DataFrame(
        {
            COL_TIME: pd.Series(dtype="int64"),
            **{dim: pd.Series(dtype=str) for dim in dimensions},
            **{metric: pd.Series(dtype="float64") for metric in metrics},
        }
    )
    return frame.set_index(index_columns(dimensions))


def merge_dataset(
    dimensions: Sequence[str],
    metrics: Sequence[str],
    metric_tables: Mapping[str, pd.DataFrame],
) -> pd.DataFrame:
    """Fold metric tables in sorted name order with full outer joins.

    When the accumulator already holds a placeholder column for the incoming
    metric, the incoming values win and the placeholder is dropped.
    """

    keys = index_columns(dimensions)
    merged = empty_dataset_frame(dimensions, metrics).reset_index()

    for metric in sorted(metric_tables):
        incoming = metric_tables[metric].reset_index()
        if metric in merged.columns:
            merged = merged.drop(columns=[metric])
        merged = pd.merge(merged, incoming, on=keys, how="outer")

    ordered = [*metrics, *(m for m in sorted(metric_tables) if m not in metrics)]
    merged = merged[[*keys, *ordered]].astype(
        {COL_TIME: "int64", **{m: "float64" for m in ordered}}
    )
    return merged.sort_values(keys, kind="stable").set_index(keys)
