"""Scan tally and session handling for a serialized cycle count."""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass, field

from .catalog import MasterCatalog
from .errors import CatalogAlreadyLoadedError
from .models import ReconciliationReport, ScanOutcome
from .normalize import normalize_identifier
from .reconcile import reconcile_counts

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScanTally:
    """Multiset of observed scans.

    `resolved` is keyed by catalog instrument number. `excess` is keyed by the
    trimmed identifier exactly as scanned, since it has no catalog identity.
    Counts only ever grow.
    """

    resolved: defaultdict[str, int] = field(default_factory=lambda: defaultdict(int))
    excess: defaultdict[str, int] = field(default_factory=lambda: defaultdict(int))

    @property
    def total(self) -> int:
        return sum(self.resolved.values()) + sum(self.excess.values())

    def count_for(self, primary_id: str) -> int:
        """Return how many times an expected item has been scanned."""

        return self.resolved.get(primary_id, 0)


@dataclass(frozen=True, slots=True)
class CountSession:
    """A catalog paired with the tally recorded against it."""

    catalog: MasterCatalog = field(default_factory=MasterCatalog)
    tally: ScanTally = field(default_factory=ScanTally)


class ReconciliationEngine:
    """Record scans against a master catalog and report the count status.

    All tally mutation and session replacement happens under one lock so scans
    arriving from several input surfaces are applied one at a time.
    """

    def __init__(self, catalog: MasterCatalog | None = None) -> None:
        self._lock = threading.Lock()
        self._session = CountSession(catalog=catalog if catalog is not None else MasterCatalog())

    @property
    def catalog(self) -> MasterCatalog:
        return self._session.catalog

    @property
    def tally(self) -> ScanTally:
        """Return a copy of the current tally."""

        with self._lock:
            tally = self._session.tally
            return ScanTally(
                resolved=defaultdict(int, tally.resolved),
                excess=defaultdict(int, tally.excess),
            )

    def load_catalog(self, catalog: MasterCatalog) -> None:
        """Install the master list and start counting against it.

        Scans recorded before the load are discarded with the empty session.
        Raises `CatalogAlreadyLoadedError` when a non-empty master list is
        already loaded; use `new_session` to start over.
        """

        with self._lock:
            if self._session.catalog:
                raise CatalogAlreadyLoadedError(
                    f"Master list already loaded with {len(self._session.catalog)} instruments"
                )
            self._session = CountSession(catalog=catalog)
        logger.info("Loaded master list with %d instruments", len(catalog))

    def new_session(self, catalog: MasterCatalog | None = None) -> None:
        """Replace the catalog and tally together."""

        with self._lock:
            self._session = CountSession(catalog=catalog if catalog is not None else MasterCatalog())
        logger.info("Started new count session")

    def record(self, raw_identifier: str | None) -> ScanOutcome:
        """Tally one scanned or typed identifier.

        Returns "matched" when it resolves to an expected item (by instrument
        or serial number) and "unmatched" otherwise. Unmatched identifiers are
        still tallied, as excess. Blank input records nothing.
        """

        identifier = (raw_identifier or "").strip()
        if not identifier:
            return "unmatched"

        with self._lock:
            session = self._session
            primary_id = session.catalog.resolve(normalize_identifier(identifier))
            if primary_id is not None:
                session.tally.resolved[primary_id] += 1
                count = session.tally.resolved[primary_id]
            else:
                session.tally.excess[identifier] += 1
                count = session.tally.excess[identifier]

        if primary_id is None:
            logger.info("Scan %r not found in master list (seen %d time(s))", identifier, count)
            return "unmatched"
        logger.debug("Scan %r matched instrument %s (seen %d time(s))", identifier, primary_id, count)
        return "matched"

    def report(self, catalog: MasterCatalog | None = None) -> ReconciliationReport:
        """Derive the reconciliation report from the current tally.

        Uses the session catalog unless another one is given.
        """

        with self._lock:
            session = self._session
            resolved = dict(session.tally.resolved)
            excess = dict(session.tally.excess)
        return reconcile_counts(catalog if catalog is not None else session.catalog, resolved, excess)
