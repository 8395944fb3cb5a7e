import os
from typing import Any

from dagster import Definitions

from mock_datasource.assets.datasets import mock_dataset_tables, mock_metric_catalog
from mock_datasource.resources import InMemoryIOManager, MockDataSourceResource


ASSETS = (
    mock_dataset_tables,
    mock_metric_catalog,
)


def _default_resources() -> dict[str, Any]:
    seed = os.environ.get("MOCK_DATASOURCE_SEED")
    workers = os.environ.get("MOCK_DATASOURCE_WORKERS")
    return {
        "mock_datasource": MockDataSourceResource(
            config_path=os.environ.get("MOCK_DATASOURCE_CONFIG", "data/mock_datasets.yaml"),
            seed=int(seed) if seed else None,
            max_workers=int(workers) if workers else None,
        ),
        "in_memory_io_manager": InMemoryIOManager(),
    }


def build_definitions(*, resources: dict[str, Any] | None = None) -> Definitions:
    return Definitions(
        assets=list(ASSETS),
        resources=resources if resources is not None else _default_resources(),
    )


defs = build_definitions()
