"""Core typed models shared by catalog, engine and report modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, TypeAlias, TypedDict

from .normalize import normalize_identifier

if TYPE_CHECKING:
    from .catalog import MasterCatalog

ScanOutcome: TypeAlias = Literal["matched", "unmatched"]


@dataclass(frozen=True, slots=True)
class DataIssue:
    """Structured data-quality issue emitted while building a catalog."""

    code: str
    message: str
    row: int | None = None


@dataclass(frozen=True, slots=True)
class ExpectedItem:
    """One serialized instrument expected on hand."""

    primary_id: str
    secondary_id: str | None = None

    def identifiers(self) -> tuple[str, ...]:
        """Return the normalized identifiers that resolve to this item."""

        keys = [normalize_identifier(self.primary_id)]
        if self.secondary_id is not None:
            secondary = normalize_identifier(self.secondary_id)
            if secondary not in keys:
                keys.append(secondary)
        return tuple(keys)


@dataclass(slots=True)
class CatalogBuildResult:
    """Built catalog plus the issues recorded for skipped or ambiguous rows."""

    catalog: MasterCatalog
    issues: list[DataIssue] = field(default_factory=list)

    @property
    def unique_count(self) -> int:
        """Return the number of unique expected items in the catalog."""

        return len(self.catalog)


class ExcessItem(TypedDict):
    """A scanned identifier with no catalog entry."""

    identifier: str
    count: int


class ReconciliationReport(TypedDict):
    """Four-way classification of a count session.

    `short` keeps the floor terminology: it holds items scanned more than once,
    mapped to their scan count.
    """

    total_expected: int
    total_scanned: int
    matched: list[str]
    short: dict[str, int]
    missing: list[str]
    excess: list[ExcessItem]
