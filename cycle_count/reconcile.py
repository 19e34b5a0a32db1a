"""Report derivation for comparing a scan tally against the master catalog."""

from __future__ import annotations

from collections.abc import Mapping

from .catalog import MasterCatalog
from .models import ExcessItem, ReconciliationReport


def classify_count(count: int) -> str:
    """Return the report bucket for an expected item scanned `count` times."""

    if count <= 0:
        return "missing"
    if count == 1:
        return "matched"
    return "short"


def reconcile_counts(
    catalog: MasterCatalog,
    resolved: Mapping[str, int],
    excess: Mapping[str, int],
) -> ReconciliationReport:
    """Classify every expected item and unmatched scan.

    `resolved` is keyed by instrument number and `excess` by the identifier as
    scanned. Items keep catalog order and excess entries keep first-scan order.
    The report is rebuilt from scratch on every call.
    """

    matched: list[str] = []
    short: dict[str, int] = {}
    missing: list[str] = []

    for item in catalog:
        count = resolved.get(item.primary_id, 0)
        bucket = classify_count(count)
        if bucket == "missing":
            missing.append(item.primary_id)
        elif bucket == "matched":
            matched.append(item.primary_id)
        else:
            short[item.primary_id] = count

    primary_ids = set(catalog.primary_ids)
    unmatched: list[ExcessItem] = [
        {"identifier": identifier, "count": count}
        for identifier, count in excess.items()
        if identifier not in primary_ids
    ]

    return {
        "total_expected": len(catalog),
        "total_scanned": sum(resolved.values()) + sum(excess.values()),
        "matched": matched,
        "short": short,
        "missing": missing,
        "excess": unmatched,
    }
