"""Command-line entry point for generating mock datasets."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable

from mock_datasource.config import load_config
from mock_datasource.registry import MS_PER_DAY, Registry, build_registry, current_time_ms
from mock_datasource.constants import DEFAULT_WINDOW_DAYS
from mock_datasource.utils.errors import MockDataError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate mock datasets from a generator config")
    parser.add_argument("config", help="Path to YAML or JSON config file")
    parser.add_argument("--out", help="Optional output directory (one file per dataset)")
    parser.add_argument("--format", choices={"csv", "jsonl"}, default="csv", help="Output format")
    parser.add_argument("--seed", type=int, help="Optional seed for reproducible values")
    parser.add_argument("--days", type=int, default=DEFAULT_WINDOW_DAYS, help="Window length in days")
    parser.add_argument("--end-ms", type=int, help="Window end as epoch millis (default: now)")
    parser.add_argument("--workers", type=int, help="Thread pool size for series synthesis")
    parser.add_argument("--limit", type=int, default=5, help="Rows per dataset to print to stdout")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable INFO logging")
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    if args.days <= 0:
        parser.error("--days must be positive")

    config = load_config(args.config)
    end_ms = args.end_ms if args.end_ms is not None else current_time_ms()
    registry = build_registry(
        config,
        start_ms=end_ms - args.days * MS_PER_DAY,
        end_ms=end_ms,
        seed=args.seed,
        max_workers=args.workers,
    )

    if args.out:
        _write_tables(registry, Path(args.out), args.format)
    else:
        _print_summary(registry, args.limit)

    return 0


def _print_summary(registry: Registry, limit: int) -> None:
    for name in registry.list_datasets():
        table = registry.resolve(name)
        print(f"{name}: {len(table)} rows, metrics={list(table.columns)}")
        if limit > 0:
            print(table.head(limit).reset_index().to_string(index=False))


def _write_tables(registry: Registry, out_dir: Path, fmt: str) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    for name in registry.list_datasets():
        frame = registry.resolve(name).reset_index()
        if fmt == "jsonl":
            frame.to_json(out_dir / f"{name}.jsonl", orient="records", lines=True)
        elif fmt == "csv":
            frame.to_csv(out_dir / f"{name}.csv", index=False)
        else:
            raise ValueError(f"Unsupported format: {fmt}")


def entrypoint() -> None:  # pragma: no cover - console entry
    try:
        raise SystemExit(main())
    except MockDataError as exc:  # pragma: no cover - console behavior
        raise SystemExit(f"error: {exc}")
