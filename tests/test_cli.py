from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from mock_datasource.cli import main
from mock_datasource.utils.errors import MockDataError


# 2024-01-15T00:00:00Z
END_MS = 1_705_276_800_000


def test_cli_writes_csv_per_dataset(tmp_path: Path, mock_config_file: Path) -> None:
    out_dir = tmp_path / "out"

    exit_code = main([
        str(mock_config_file),
        "--out",
        str(out_dir),
        "--end-ms",
        str(END_MS),
        "--days",
        "2",
        "--seed",
        "7",
    ])

    assert exit_code == 0
    assert sorted(p.name for p in out_dir.iterdir()) == ["billing.csv", "web.csv"]

    billing = pd.read_csv(out_dir / "billing.csv")
    assert list(billing.columns) == ["time", "plan", "revenue"]
    assert len(billing) == 2 * 2
    assert billing.loc[billing["plan"] == "free", "revenue"].eq(0).all()

    web = pd.read_csv(out_dir / "web.csv")
    assert list(web.columns) == ["time", "region", "device", "views", "signups"]
    assert len(web) == 3 * 48


def test_cli_writes_jsonl(tmp_path: Path, mock_config_file: Path) -> None:
    out_dir = tmp_path / "out"

    main([str(mock_config_file), "--out", str(out_dir), "--format", "jsonl", "--end-ms", str(END_MS), "--days", "1"])

    lines = (out_dir / "billing.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2


def test_cli_prints_summary(mock_config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main([str(mock_config_file), "--end-ms", str(END_MS), "--days", "1", "--limit", "2", "--workers", "2"])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "billing: 2 rows, metrics=['revenue']" in out
    assert "web: 72 rows, metrics=['views', 'signups']" in out


def test_cli_propagates_config_errors(tmp_path: Path) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("datasets:\n  web:\n    granularity: sometimes\n    metrics: {}\n", encoding="utf-8")

    with pytest.raises(MockDataError):
        main([str(bad)])
