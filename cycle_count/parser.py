"""Master list and scan file readers.

Master lists are headerless by default: every row is `instrument number`
optionally followed by `serial number`. CSV and text files go through the
standard `csv` module; spreadsheets go through pandas.
"""

from __future__ import annotations

import csv
import logging
import zipfile
from collections.abc import Iterator
from pathlib import Path

import pandas as pd

from .catalog import build_catalog
from .errors import CatalogBuildError
from .models import CatalogBuildResult

logger = logging.getLogger(__name__)

CSV_EXTENSIONS = frozenset({".csv"})
TEXT_EXTENSIONS = frozenset({".txt"})
SPREADSHEET_EXTENSIONS = frozenset({".xlsx", ".xls"})
SUPPORTED_EXTENSIONS = CSV_EXTENSIONS | TEXT_EXTENSIONS | SPREADSHEET_EXTENSIONS

_TEXT_DELIMITERS = ",\t;|"


def _read_delimited(path: Path, *, sniff: bool) -> list[list[str]]:
    """Read a delimited text file into rows of raw string fields."""

    with path.open("r", encoding="utf-8-sig", newline="") as handle:
        dialect: type[csv.Dialect] | csv.Dialect = csv.excel
        if sniff:
            sample = handle.read(4096)
            handle.seek(0)
            try:
                dialect = csv.Sniffer().sniff(sample, delimiters=_TEXT_DELIMITERS)
            except csv.Error:
                # Single-column files have nothing to sniff.
                dialect = csv.excel
        return [row for row in csv.reader(handle, dialect)]


def _read_spreadsheet(path: Path) -> list[list[str]]:
    """Read the first sheet of a workbook with every cell as a string."""

    frame = pd.read_excel(path, header=None, dtype=str, keep_default_na=False)
    return frame.fillna("").values.tolist()


def read_rows(path: str | Path, *, has_header: bool = False) -> list[list[str]]:
    """Read raw master list rows from a CSV, text or spreadsheet file.

    Raises `CatalogBuildError` when the file is missing, has an unsupported
    extension or cannot be parsed. Blank rows are returned as-is and filtered
    later by catalog building.
    """

    source = Path(path)
    extension = source.suffix.lower()
    if extension not in SUPPORTED_EXTENSIONS:
        supported = ", ".join(sorted(SUPPORTED_EXTENSIONS))
        raise CatalogBuildError(f"Unsupported master list type '{extension or source.name}'; expected one of {supported}")

    try:
        if extension in SPREADSHEET_EXTENSIONS:
            rows = _read_spreadsheet(source)
        else:
            rows = _read_delimited(source, sniff=extension in TEXT_EXTENSIONS)
    except FileNotFoundError as exc:
        raise CatalogBuildError(f"Master list not found: {source}") from exc
    except (OSError, UnicodeDecodeError, csv.Error, ValueError, zipfile.BadZipFile) as exc:
        logger.error("Error parsing master list %s: %s", source, exc)
        raise CatalogBuildError(f"Error loading master list {source.name}: {exc}") from exc

    if has_header and rows:
        rows = rows[1:]
    logger.debug("Read %d raw rows from %s", len(rows), source)
    return rows


def load_catalog(path: str | Path, *, has_header: bool = False) -> CatalogBuildResult:
    """Read a master list file and build its catalog."""

    return build_catalog(read_rows(path, has_header=has_header))


def read_scans(path: str | Path) -> Iterator[str]:
    """Yield one scanned identifier per non-blank line of a text file."""

    source = Path(path)
    with source.open("r", encoding="utf-8-sig") as handle:
        for line in handle:
            identifier = line.strip()
            if identifier:
                yield identifier
