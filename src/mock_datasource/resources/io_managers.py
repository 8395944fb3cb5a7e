from dagster import IOManager, InputContext, OutputContext

from ..utils.errors import Err, MockDataError


class InMemoryIOManager(IOManager):
    """In-memory IO manager; generated tables never touch disk."""

    def __init__(self):
        self._store = {}

    def handle_output(self, context: OutputContext, obj):
        partition_key = context.partition_key if context.has_partition_key else None
        key = (tuple(context.asset_key.path), partition_key)
        self._store[key] = obj

    def load_input(self, context: InputContext):
        upstream = context.upstream_output
        partition_key = context.partition_key if context.has_partition_key else None
        asset_name = upstream.asset_key.path[-1] if upstream.asset_key.path else ""
        key = (tuple(upstream.asset_key.path), partition_key)
        if key not in self._store:
            raise MockDataError(
                Err.NOT_FOUND,
                ctx={
                    "reason": "in_memory_missing",
                    "asset": asset_name,
                    "partition": partition_key,
                },
            )

        return self._store[key]
