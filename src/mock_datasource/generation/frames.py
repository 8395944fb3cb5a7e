"""Row-union of all leaf series belonging to one metric."""

from __future__ import annotations

from typing import Iterable, Sequence

import pandas as pd

from mock_datasource.config.models import LeafPath
from mock_datasource.constants import COL_TIME, COL_VALUE
from mock_datasource.utils.errors import Err, MockDataError

# ("dataset", "metrics", "metric", dim_value_1, ...)
_DIMENSION_OFFSET = 3


def index_columns(dimensions: Sequence[str]) -> list[str]:
    return [COL_TIME, *dimensions]


def empty_metric_frame(metric: str, dimensions: Sequence[str]) -> pd.DataFrame:
    frame = pd.DataFrame(
        {
            COL_TIME: pd.Series(dtype="int64"),
            **{dim: pd.Series(dtype=str) for dim in dimensions},
            metric: pd.Series(dtype="float64"),
        }
    )
    return frame.set_index(index_columns(dimensions))


def assemble_metric_frame(
    metric: str,
    dimensions: Sequence[str],
    series_by_path: Iterable[tuple[LeafPath, pd.DataFrame]],
) -> pd.DataFrame:
    """Stack every leaf's series into one table keyed by (time, dimensions)."""

    blocks: list[pd.DataFrame] = []
    for path, series in series_by_path:
        if len(path) != _DIMENSION_OFFSET + len(dimensions):
            raise MockDataError(
                Err.CONFIG_MALFORMED,
                ctx={"metric": metric, "path": "/".join(path), "error": "path length mismatch"},
            )
        block = series.rename(columns={COL_VALUE: metric})
        for i, dim in enumerate(dimensions):
            block[dim] = path[_DIMENSION_OFFSET + i]
        blocks.append(block[[COL_TIME, *dimensions, metric]])

    if not blocks:
        return empty_metric_frame(metric, dimensions)

    frame = pd.concat(blocks, ignore_index=True).set_index(index_columns(dimensions))
    if not frame.index.is_unique:
        duplicated = frame.index[frame.index.duplicated()][0]
        raise MockDataError(
            Err.CONFIG_MALFORMED,
            ctx={"metric": metric, "duplicate_key": repr(duplicated), "error": "duplicate index"},
        )
    return frame
