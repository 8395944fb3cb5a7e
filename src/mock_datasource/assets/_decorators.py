from __future__ import annotations

import dagster as dg
from ._error_boundary import with_asset_error_boundary


def asset_with_boundary(*, stage: str, name: str | None = None, group_name: str | None = None, **asset_kwargs):
    """Compose @dagster.asset with the MockDataError boundary.

    Usage mirrors @dagster.asset; extra kwargs such as io_manager_key,
    required_resource_keys or deps pass straight through.
    """

    def deco(fn):
        wrapped = with_asset_error_boundary(stage=stage)(fn)
        return dg.asset(name=name, group_name=group_name, **asset_kwargs)(wrapped)

    return deco
