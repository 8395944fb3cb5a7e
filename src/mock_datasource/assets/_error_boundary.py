from __future__ import annotations

from functools import wraps
from typing import Any

from dagster import Failure, MetadataValue, get_dagster_logger

from mock_datasource.utils.errors import MockDataError


__all__ = ["with_asset_error_boundary"]


def with_asset_error_boundary(stage: str):
    """Wrap an asset so generation errors surface as dagster.Failure.

    functools.wraps keeps the wrapped signature, so Dagster input and
    resource binding is unchanged.
    """

    def deco(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except Failure:
                raise
            except MockDataError as err:
                logger = get_dagster_logger()
                description = f"[{stage}] {err}"
                logger.error(description)
                metadata: dict[str, MetadataValue] = {
                    "error_code": MetadataValue.text(err.code.name)
                }
                if err.ctx:
                    metadata.update(_ctx_to_metadata(err.ctx))
                raise Failure(description=description, metadata=metadata) from err

        return wrapper

    return deco


def _ctx_to_metadata(ctx: dict[str, Any]) -> dict[str, MetadataValue]:
    if not ctx:
        return {}
    try:
        return {"error_ctx": MetadataValue.json(ctx)}
    except TypeError:
        return {"error_ctx_repr": MetadataValue.text(repr(ctx))}
