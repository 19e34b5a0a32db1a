"""Cycle count runner for serialized inventory.

This script loads a master list, records scans from files, flags or an
interactive scanner session, and writes a structured JSON report under
`output/` by default.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TextIO

from cycle_count import CatalogBuildError, ReconciliationEngine, load_catalog, read_scans
from cycle_count.logging import configure_logging
from cycle_count.models import DataIssue

DEFAULT_OUTPUT = Path("output/cycle_count_report.json")
NOT_FOUND_PROMPT = "Number not found in master list. Please check and try again."
DUPLICATE_POLICY = (
    "Rows repeating an instrument number (ignoring case) keep the first row's serial number; "
    "identifiers shared by several instruments resolve to the first instrument listed."
)

logger = logging.getLogger(__name__)


def _issue_to_dict(issue: DataIssue) -> dict[str, Any]:
    """Serialize a `DataIssue` into a JSON-friendly dictionary."""

    return {
        "code": issue.code,
        "row": issue.row,
        "message": issue.message,
    }


def record_scans(engine: ReconciliationEngine, scans: Iterable[str]) -> list[str]:
    """Record every scan and return the identifiers that were not found."""

    unmatched: list[str] = []
    for scan in scans:
        if engine.record(scan) == "unmatched" and scan.strip():
            unmatched.append(scan.strip())
    return unmatched


def run_interactive(engine: ReconciliationEngine, *, stdin: TextIO, stdout: TextIO) -> None:
    """Read scans line by line until end of input, prompting on misses.

    Handheld scanners in keyboard mode type the barcode followed by Enter or
    Tab, so each line or tab-separated field is one scan.
    """

    for line in stdin:
        for scan in line.split("\t"):
            if not scan.strip():
                continue
            if engine.record(scan) == "unmatched":
                print(NOT_FOUND_PROMPT, file=stdout)
            report = engine.report()
            print(f"Scanned {report['total_scanned']} of {report['total_expected']} expected", file=stdout)


def build_report(engine: ReconciliationEngine, *, master_path: Path, issues: list[DataIssue]) -> dict[str, Any]:
    """Build a complete cycle count report payload."""

    reconciliation = engine.report()
    return {
        "metadata": {
            "generated_at_utc": datetime.now(timezone.utc).isoformat(),
            "master_path": str(master_path),
            "duplicate_policy": DUPLICATE_POLICY,
        },
        "summary": {
            "total_expected": reconciliation["total_expected"],
            "total_scanned": reconciliation["total_scanned"],
            "matched_count": len(reconciliation["matched"]),
            "short_count": len(reconciliation["short"]),
            "missing_count": len(reconciliation["missing"]),
            "excess_count": len(reconciliation["excess"]),
        },
        "reconciliation": reconciliation,
        "data_quality_issues": {
            "catalog_issues": [_issue_to_dict(issue) for issue in issues],
        },
    }


def write_report(report: dict[str, Any], *, output_path: Path) -> None:
    """Write report JSON to disk."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(report, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for a count session."""

    parser = argparse.ArgumentParser(description="Reconcile serialized inventory scans against a master list.")
    parser.add_argument("--master", type=Path, required=True, help="Master list (.csv, .txt, .xlsx, .xls)")
    parser.add_argument("--has-header", action="store_true", help="Skip the first row of the master list")
    parser.add_argument("--scans", type=Path, action="append", default=[], help="File with one scan per line")
    parser.add_argument("--scan", action="append", default=[], help="Single scanned or typed identifier")
    parser.add_argument("--interactive", action="store_true", help="Read scans from standard input")
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT, help="Output JSON path")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for command-line execution."""

    args = _parse_args(argv)
    configure_logging(level=getattr(logging, args.log_level))

    try:
        result = load_catalog(args.master, has_header=args.has_header)
    except CatalogBuildError as exc:
        print(f"Error loading master list: {exc}", file=sys.stderr)
        return 1
    print(f"Master list loaded: {result.unique_count} unique instruments.")

    engine = ReconciliationEngine(result.catalog)
    for scans_path in args.scans:
        try:
            missed = record_scans(engine, read_scans(scans_path))
        except (OSError, UnicodeDecodeError) as exc:
            print(f"Error reading scans file {scans_path}: {exc}", file=sys.stderr)
            return 1
        logger.info("Recorded scans from %s (%d not found)", scans_path, len(missed))
    record_scans(engine, args.scan)
    if args.interactive:
        run_interactive(engine, stdin=sys.stdin, stdout=sys.stdout)

    report = build_report(engine, master_path=args.master, issues=result.issues)
    write_report(report, output_path=args.output)
    print(f"Wrote cycle count report: {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
