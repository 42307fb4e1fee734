"""Utility functions for Google Sheets operations."""

import re


def col_letter(index: int) -> str:
    """Convert 0-based index to column letter (A, B, ..., Z, AA, AB, ...)."""
    result = ""
    while index >= 0:
        result = chr(index % 26 + ord("A")) + result
        index = index // 26 - 1
    return result


def quote_tab(tab: str) -> str:
    """Quote a tab title for use in an A1 range ('It''s' style escaping)."""
    return "'" + tab.replace("'", "''") + "'"


def a1(tab: str, cells: str) -> str:
    """Build an A1 range such as 'Sheet 1'!C5."""
    return f"{quote_tab(tab)}!{cells}"


_UPDATED_RANGE_ROW = re.compile(r"![A-Z]+(\d+)")


def row_from_updated_range(updated_range: str) -> int | None:
    """Extract the first row number from an append result's updatedRange."""
    m = _UPDATED_RANGE_ROW.search(updated_range or "")
    return int(m.group(1)) if m else None


def cell(row: list, index: int, default: str = "") -> str:
    """Positional cell value with a fallback for short or blank cells."""
    if index < len(row) and row[index] not in (None, ""):
        return str(row[index])
    return default
