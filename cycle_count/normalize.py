"""Field-level normalization helpers used by catalog building and scanning."""

from __future__ import annotations

from typing import Any


def normalize_field(value: Any) -> str:
    """Stringify a raw cell value and trim surrounding whitespace.

    `None` renders as an empty string so missing spreadsheet cells behave like
    blank CSV fields.
    """

    if value is None:
        return ""
    return str(value).strip()


def normalize_identifier(value: str | None) -> str:
    """Return the matching key for an identifier: trimmed and upper-cased."""

    if value is None:
        return ""
    return value.strip().upper()


def split_row(row: Any) -> tuple[str, str | None] | None:
    """Split a raw row into `(primary_id, secondary_id)`.

    Returns None when the row has no usable primary identifier. Fields past the
    second are ignored.
    """

    fields = list(row or [])
    if not fields:
        return None

    primary = normalize_field(fields[0])
    if primary == "":
        return None

    secondary = normalize_field(fields[1]) if len(fields) > 1 else ""
    return primary, secondary or None
