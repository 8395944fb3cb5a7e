from __future__ import annotations

from zoneinfo import ZoneInfo

import pandas as pd
import pytest

from mock_datasource.config.periods import Granularity, parse_period, parse_timezone
from mock_datasource.utils.errors import Err, MockDataError


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1hour", Granularity(1, "hours")),
        ("15 minutes", Granularity(15, "minutes")),
        ("5_MIN", Granularity(5, "minutes")),
        ("1d", Granularity(1, "days")),
        ("2weeks", Granularity(2, "weeks")),
        ("1mon", Granularity(1, "months")),
        ("500ms", Granularity(500, "milliseconds")),
    ],
)
def test_parse_period_accepts_aliases(text: str, expected: Granularity) -> None:
    assert parse_period(text) == expected


@pytest.mark.parametrize("text", ["hour", "1fortnight", "0hours", "-1hour", "", "1.5hours"])
def test_parse_period_rejects_garbage(text: str) -> None:
    with pytest.raises(MockDataError) as exc:
        parse_period(text)
    assert exc.value.code is Err.INVALID_PERIOD


def test_parse_period_rejects_non_string() -> None:
    with pytest.raises(MockDataError) as exc:
        parse_period(3600)  # type: ignore[arg-type]
    assert exc.value.code is Err.INVALID_PERIOD


def test_granularity_offset_fixed_vs_calendar() -> None:
    assert parse_period("2hours").offset() == pd.Timedelta(hours=2)
    assert parse_period("1day").offset() == pd.DateOffset(days=1)
    assert parse_period("90s").is_fixed
    assert not parse_period("1year").is_fixed


def test_parse_timezone_known_zone() -> None:
    assert parse_timezone("America/Los_Angeles") == ZoneInfo("America/Los_Angeles")


@pytest.mark.parametrize("text", ["Mars/Olympus_Mons", "", "../etc/passwd"])
def test_parse_timezone_unknown_zone(text: str) -> None:
    with pytest.raises(MockDataError) as exc:
        parse_timezone(text)
    assert exc.value.code is Err.INVALID_TIMEZONE
