"""Granularity and timezone parsing for dataset configs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pandas as pd

from mock_datasource.utils.errors import Err, MockDataError

DEFAULT_TIMEZONE = "America/Los_Angeles"
DEFAULT_GRANULARITY = "1hour"

_PERIOD_PATTERN = re.compile(r"^\s*(\d+)[\s_]*([a-z]+)\s*$")

_UNIT_ALIASES: dict[str, str] = {}
for _canonical, _aliases in {
    "milliseconds": ("ms", "milli", "millis", "millisecond", "milliseconds"),
    "seconds": ("s", "sec", "secs", "second", "seconds"),
    "minutes": ("m", "min", "mins", "minute", "minutes"),
    "hours": ("h", "hour", "hours"),
    "days": ("d", "day", "days"),
    "weeks": ("w", "week", "weeks"),
    "months": ("mon", "month", "months"),
    "years": ("y", "year", "years"),
}.items():
    for _alias in _aliases:
        _UNIT_ALIASES[_alias] = _canonical

# Units stepped as absolute durations; everything else follows the local calendar.
_FIXED_UNITS = frozenset({"milliseconds", "seconds", "minutes", "hours"})


@dataclass(frozen=True)
class Granularity:
    """A calendar period such as ``1hour`` or ``3days``."""

    count: int
    unit: str

    @property
    def is_fixed(self) -> bool:
        return self.unit in _FIXED_UNITS

    def offset(self) -> pd.Timedelta | pd.DateOffset:
        if self.is_fixed:
            return pd.Timedelta(**{self.unit: self.count})
        return pd.DateOffset(**{self.unit: self.count})

    def __str__(self) -> str:
        return f"{self.count}{self.unit}"


def parse_period(text: str) -> Granularity:
    """Parse ``<count><unit>`` into a :class:`Granularity`."""

    if not isinstance(text, str):
        raise MockDataError(
            Err.INVALID_PERIOD,
            ctx={"granularity": repr(text), "reason": "period must be string"},
        )

    match = _PERIOD_PATTERN.match(text.lower())
    if not match:
        raise MockDataError(Err.INVALID_PERIOD, ctx={"granularity": text})

    count = int(match.group(1))
    unit = _UNIT_ALIASES.get(match.group(2))
    if unit is None:
        raise MockDataError(
            Err.INVALID_PERIOD,
            ctx={"granularity": text, "reason": f"unknown unit {match.group(2)!r}"},
        )
    if count <= 0:
        raise MockDataError(
            Err.INVALID_PERIOD,
            ctx={"granularity": text, "reason": "count must be positive"},
        )
    return Granularity(count=count, unit=unit)


def parse_timezone(text: str) -> ZoneInfo:
    if not isinstance(text, str) or not text.strip():
        raise MockDataError(Err.INVALID_TIMEZONE, ctx={"timezone": repr(text)})
    try:
        return ZoneInfo(text)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise MockDataError(Err.INVALID_TIMEZONE, ctx={"timezone": text}, cause=exc)
