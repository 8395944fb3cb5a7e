"""
Group: mock_data

Assets that materialize the generated mock datasets and a per-metric catalog.
Both live in memory only and are rebuilt on every run.
"""

from __future__ import annotations

from typing import Dict

import pandas as pd
from dagster import MetadataValue

from ._decorators import asset_with_boundary

CATALOG_COLUMNS = ["metric_id", "dataset", "metric", "rows", "non_null", "max_time"]


@asset_with_boundary(
    stage="generation",
    group_name="mock_data",
    io_manager_key="in_memory_io_manager",
    required_resource_keys={"mock_datasource"},
)
def mock_dataset_tables(context) -> Dict[str, pd.DataFrame]:
    """Build every configured dataset and return the wide tables keyed by name."""

    registry = context.resources.mock_datasource.get_registry()
    tables = {name: registry.resolve(name) for name in registry.list_datasets()}

    context.add_output_metadata(
        {
            "datasets": MetadataValue.json(sorted(tables)),
            "total_rows": MetadataValue.int(sum(len(t) for t in tables.values())),
            "window_start_ms": MetadataValue.int(registry.start_ms),
            "window_end_ms": MetadataValue.int(registry.end_ms),
        }
    )
    context.log.info(f"Generated {len(tables)} mock datasets")
    return tables


@asset_with_boundary(
    stage="generation",
    group_name="mock_data",
    io_manager_key="in_memory_io_manager",
    required_resource_keys={"mock_datasource"},
)
def mock_metric_catalog(context, mock_dataset_tables: Dict[str, pd.DataFrame]) -> pd.DataFrame:
    """One row per (dataset, metric) with its global metric id and fill stats."""

    registry = context.resources.mock_datasource.get_registry()

    rows = []
    for dataset in sorted(mock_dataset_tables):
        table = mock_dataset_tables[dataset]
        max_time = registry.max_data_time(dataset)
        for metric in sorted(table.columns):
            rows.append(
                {
                    "metric_id": registry.metric_id(dataset, metric),
                    "dataset": dataset,
                    "metric": metric,
                    "rows": len(table),
                    "non_null": int(table[metric].notna().sum()),
                    "max_time": max_time,
                }
            )

    catalog = pd.DataFrame(rows, columns=CATALOG_COLUMNS)
    context.add_output_metadata({"metric_count": MetadataValue.int(len(catalog))})
    return catalog
