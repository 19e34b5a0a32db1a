from __future__ import annotations

"""Unit tests for field-level normalization helpers.

Each case focuses on one rule so regressions in identifier matching are easy to
diagnose.
"""

from cycle_count.normalize import normalize_field, normalize_identifier, split_row


def test_normalize_field_stringifies_and_trims() -> None:
    """Cells are rendered as text with surrounding whitespace removed."""
    assert normalize_field("  INST-1 ") == "INST-1"
    assert normalize_field(1042) == "1042"
    assert normalize_field(None) == ""


def test_normalize_identifier_is_case_and_whitespace_insensitive() -> None:
    """Identifiers compare on their trimmed upper-case form."""
    assert normalize_identifier(" inst-1\t") == "INST-1"
    assert normalize_identifier("Sn-99") == normalize_identifier("SN-99 ")
    assert normalize_identifier(None) == ""


def test_split_row_reads_primary_and_optional_secondary() -> None:
    """One field is an instrument number; two or more add a serial number."""
    assert split_row(["INST-1"]) == ("INST-1", None)
    assert split_row([" INST-1 ", " SN-99 "]) == ("INST-1", "SN-99")
    assert split_row(["INST-1", "SN-99", "Bay 7", "extra"]) == ("INST-1", "SN-99")


def test_split_row_treats_blank_secondary_as_absent() -> None:
    """An empty serial column does not create an empty-string identifier."""
    assert split_row(["INST-1", "   "]) == ("INST-1", None)
    assert split_row(["INST-1", None]) == ("INST-1", None)


def test_split_row_drops_rows_without_primary() -> None:
    """Blank rows and rows with a blank first field are unusable."""
    assert split_row([]) is None
    assert split_row(None) is None
    assert split_row(["   ", "SN-99"]) is None
    assert split_row([None]) is None
