"""Generation pipeline: leaf paths, series, metric tables, dataset tables."""

from .frames import assemble_metric_frame, empty_metric_frame, index_columns
from .merge import empty_dataset_frame, merge_dataset
from .series import make_series, timestamps
from .tuples import filter_tuples, make_tuples, resolve_tuple

__all__ = [
    "assemble_metric_frame",
    "empty_dataset_frame",
    "empty_metric_frame",
    "filter_tuples",
    "index_columns",
    "make_series",
    "make_tuples",
    "merge_dataset",
    "resolve_tuple",
    "timestamps",
]
