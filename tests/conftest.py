"""Shared fixtures and local package import resolution."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    # Tests import `cycle_count` and the `reconcile` runner from the checkout.
    sys.path.insert(0, str(PROJECT_ROOT))

from cycle_count import MasterCatalog, ReconciliationEngine  # noqa: E402

DATA_DIR = PROJECT_ROOT / "data"


@pytest.fixture
def master_list_path() -> Path:
    return DATA_DIR / "master_list.csv"


@pytest.fixture
def scans_path() -> Path:
    return DATA_DIR / "scans.txt"


@pytest.fixture
def abc_catalog() -> MasterCatalog:
    """Three instruments, each with a serial number."""

    return MasterCatalog.build([["A", "SN-A"], ["B", "SN-B"], ["C", "SN-C"]])


@pytest.fixture
def engine(abc_catalog: MasterCatalog) -> ReconciliationEngine:
    return ReconciliationEngine(abc_catalog)
