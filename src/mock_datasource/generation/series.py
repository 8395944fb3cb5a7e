"""Calendar-aligned synthetic series for a single leaf."""

from __future__ import annotations

from functools import lru_cache
from zoneinfo import ZoneInfo

import numpy as np
import pandas as pd

from mock_datasource.config.models import GeneratorParams
from mock_datasource.config.periods import Granularity
from mock_datasource.constants import COL_TIME, COL_VALUE

_NS_PER_MS = 1_000_000


def _to_local(epoch_ms: int, timezone: ZoneInfo) -> pd.Timestamp:
    return pd.Timestamp(epoch_ms, unit="ms", tz="UTC").tz_convert(timezone)


def _localize_ms(wall: pd.Timestamp, timezone: ZoneInfo) -> int:
    # A repeated wall time maps to its first occurrence; a skipped one moves past the gap.
    local = wall.tz_localize(timezone, ambiguous=True, nonexistent="shift_forward")
    return local.value // _NS_PER_MS


@lru_cache(maxsize=64)
def timestamps(
    start_ms: int,
    end_ms: int,
    granularity: Granularity,
    timezone: ZoneInfo,
) -> tuple[int, ...]:
    """Epoch-millis grid for ``[start_ms, end_ms)``.

    The grid is anchored at local midnight of the day containing ``start_ms``,
    also for sub-day granularities, so overlapping windows share timestamps.
    Calendar steps advance the local wall clock, so a daily grid stays on
    midnight across DST changes.
    """

    if end_ms <= start_ms:
        return ()

    wall = _to_local(start_ms, timezone).tz_localize(None).normalize()

    if granularity.is_fixed:
        origin_ms = _localize_ms(wall, timezone)
        step_ms = granularity.offset().value // _NS_PER_MS
        skipped = -(-(start_ms - origin_ms) // step_ms)
        first = origin_ms + skipped * step_ms
        return tuple(int(t) for t in np.arange(first, end_ms, step_ms, dtype="int64"))

    step = granularity.offset()
    grid: list[int] = []
    instant = _localize_ms(wall, timezone)
    while instant < end_ms:
        if instant >= start_ms:
            grid.append(instant)
        wall = wall + step
        instant = _localize_ms(wall, timezone)
    return tuple(grid)


def _round_half_away(samples: np.ndarray) -> np.ndarray:
    magnitude = np.abs(samples)
    whole = np.floor(magnitude)
    # compare the exact fraction; floor(x + 0.5) rounds 0.49999999999999994 up
    return np.sign(samples) * (whole + (magnitude - whole >= 0.5))


def make_series(
    params: GeneratorParams,
    start_ms: int,
    end_ms: int,
    granularity: Granularity,
    timezone: ZoneInfo,
    rng: np.random.Generator | None = None,
) -> pd.DataFrame:
    """Sample one value per grid step from Normal(mean, std).

    Values are rounded to whole counts and clamped at zero. Pass a seeded
    ``rng`` for reproducible values; the timestamps never depend on it.
    """

    times = np.asarray(timestamps(start_ms, end_ms, granularity, timezone), dtype="int64")
    generator = rng if rng is not None else np.random.default_rng()
    rounded = _round_half_away(generator.normal(params.mean, params.std, size=len(times)))
    values = np.where(rounded > 0, rounded, 0.0).astype("float64")
    return pd.DataFrame({COL_TIME: times, COL_VALUE: values})
