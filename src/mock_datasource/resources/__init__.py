from .io_managers import InMemoryIOManager
from .mock_datasource import MockDataSourceResource

__all__ = [
    "InMemoryIOManager",
    "MockDataSourceResource",
]
