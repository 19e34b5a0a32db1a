"""Error definitions for cycle count sessions."""

from __future__ import annotations


class CycleCountError(RuntimeError):
    """Base class for cycle count failures."""


class CatalogBuildError(CycleCountError):
    """Raised when the master list cannot be read or parsed."""


class CatalogAlreadyLoadedError(CycleCountError):
    """Raised when a master list is loaded into a session that already has one."""
