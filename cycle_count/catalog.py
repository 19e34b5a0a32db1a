"""Master catalog of expected serialized instruments."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Any

from .models import CatalogBuildResult, DataIssue, ExpectedItem
from .normalize import normalize_identifier, split_row

logger = logging.getLogger(__name__)


class MasterCatalog:
    """Ordered, deduplicated set of expected items with an identifier lookup.

    Every normalized identifier (instrument number or serial number) maps to
    exactly one item. When two items share an identifier, the item registered
    first keeps it.
    """

    __slots__ = ("_items", "_lookup")

    def __init__(self, items: Iterable[ExpectedItem] = ()) -> None:
        kept: dict[str, ExpectedItem] = {}
        for item in items:
            # Instrument numbers are unique ignoring case; the first item wins.
            kept.setdefault(normalize_identifier(item.primary_id), item)
        self._items: tuple[ExpectedItem, ...] = tuple(kept.values())
        self._lookup: dict[str, str] = {}
        for item in self._items:
            for key in item.identifiers():
                self._lookup.setdefault(key, item.primary_id)

    @classmethod
    def build(cls, rows: Iterable[Sequence[Any]]) -> MasterCatalog:
        """Build a catalog from raw parsed rows, discarding build issues."""

        return build_catalog(rows).catalog

    @property
    def items(self) -> tuple[ExpectedItem, ...]:
        """Return expected items in master-list order."""

        return self._items

    @property
    def primary_ids(self) -> list[str]:
        return [item.primary_id for item in self._items]

    def resolve(self, identifier: str | None) -> str | None:
        """Return the owning instrument number for an identifier, or None.

        Comparison ignores case and surrounding whitespace.
        """

        key = normalize_identifier(identifier)
        if not key:
            return None
        return self._lookup.get(key)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and self.resolve(identifier) is not None

    def __iter__(self) -> Iterator[ExpectedItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"MasterCatalog(items={len(self._items)})"


def build_catalog(rows: Iterable[Sequence[Any]]) -> CatalogBuildResult:
    """Build a catalog from raw rows and report what was skipped.

    Rows are numbered from 1 in source order. A row without a usable instrument
    number is dropped. Rows repeating an instrument number already seen
    (ignoring case) are dropped in favour of the first occurrence, whether or
    not the serial number differs, so instrument numbers stay unique.
    """

    issues: list[DataIssue] = []
    items: list[ExpectedItem] = []
    seen: dict[str, ExpectedItem] = {}
    claimed: dict[str, str] = {}

    for row_number, row in enumerate(rows, start=1):
        parsed = split_row(row)
        if parsed is None:
            logger.debug("Row %d has no instrument number and was skipped", row_number)
            issues.append(
                DataIssue(
                    code="row_dropped",
                    message=f"Row {row_number} has no instrument number and was skipped",
                    row=row_number,
                )
            )
            continue

        primary_id, secondary_id = parsed
        primary_key = normalize_identifier(primary_id)
        first = seen.get(primary_key)
        if first is not None:
            if normalize_identifier(first.secondary_id) == normalize_identifier(secondary_id):
                code = "duplicate_row"
                message = f"Row {row_number} repeats instrument {first.primary_id}"
            else:
                code = "duplicate_primary_id"
                message = (
                    f"Row {row_number} repeats instrument {first.primary_id} with serial "
                    f"{secondary_id or '(none)'}; keeping serial {first.secondary_id or '(none)'}"
                )
            logger.debug(message)
            issues.append(DataIssue(code=code, message=message, row=row_number))
            continue

        item = ExpectedItem(primary_id=primary_id, secondary_id=secondary_id)
        for key in item.identifiers():
            owner = claimed.setdefault(key, item.primary_id)
            if owner != item.primary_id:
                message = f"Identifier {key} on row {row_number} already resolves to instrument {owner}"
                logger.debug(message)
                issues.append(DataIssue(code="ambiguous_identifier", message=message, row=row_number))

        seen[primary_key] = item
        items.append(item)

    catalog = MasterCatalog(items)
    logger.info("Master list loaded: %d unique instruments", len(catalog))
    return CatalogBuildResult(catalog=catalog, issues=issues)
