"""Public API exports for serialized cycle count reconciliation."""

from .catalog import MasterCatalog, build_catalog
from .engine import CountSession, ReconciliationEngine, ScanTally
from .errors import CatalogAlreadyLoadedError, CatalogBuildError, CycleCountError
from .models import (
    CatalogBuildResult,
    DataIssue,
    ExcessItem,
    ExpectedItem,
    ReconciliationReport,
    ScanOutcome,
)
from .parser import load_catalog, read_rows, read_scans
from .reconcile import reconcile_counts

__all__ = [
    "CatalogAlreadyLoadedError",
    "CatalogBuildError",
    "CatalogBuildResult",
    "CountSession",
    "CycleCountError",
    "DataIssue",
    "ExcessItem",
    "ExpectedItem",
    "MasterCatalog",
    "ReconciliationEngine",
    "ReconciliationReport",
    "ScanOutcome",
    "ScanTally",
    "build_catalog",
    "load_catalog",
    "read_rows",
    "read_scans",
    "reconcile_counts",
]
