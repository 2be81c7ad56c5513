"""
statement_core.header_locator
Find where the transaction table starts inside a loosely laid out statement.

Bank exports put a variable amount of account metadata above the table and
sometimes a few decorative/merged columns to the left of it. We scan row by
row for the exact header signature, allowing it to start in any of the first
MAX_START_COLUMN columns.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from .config import HEADER_SIGNATURE, MAX_START_COLUMN
from .utils import is_blank

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class HeaderLocation:
    data_start_row: int
    data_start_column: int
    sheet_name: Optional[str] = None

def _cell(row: Sequence[Any], column: int) -> Any:
    # 1-indexed; short rows mean blank trailing cells
    if column - 1 < len(row):
        return row[column - 1]
    return None

def _matches_at(row: Sequence[Any], start_column: int, signature: Sequence[str]) -> bool:
    for offset, label in enumerate(signature):
        value = _cell(row, start_column + offset)
        # type-sensitive: a numeric 1 never equals the label "1"
        if type(value) is not type(label) or value != label:
            return False
    return True

def find_header(
    rows: Iterable[Sequence[Any]],
    signature: Sequence[str] = HEADER_SIGNATURE,
    max_start_column: int = MAX_START_COLUMN,
) -> Optional[HeaderLocation]:
    """
    Scan a row-major grid (rows[0] is spreadsheet row 1) for the signature.

    Returns the first match as HeaderLocation(header_row + 1, start_column),
    or None when nothing matches.
    """
    for row_number, row in enumerate(rows, start=1):
        if all(is_blank(v) for v in row):
            continue
        for start_column in range(1, max_start_column + 1):
            if _matches_at(row, start_column, signature):
                return HeaderLocation(row_number + 1, start_column)
    return None

def locate_header(workbook, signature: Sequence[str] = HEADER_SIGNATURE) -> Optional[HeaderLocation]:
    """Scan worksheets in stored order; first match across the workbook wins."""
    for ws in workbook.worksheets:
        try:
            max_row = ws.max_row
            rows = ws.iter_rows(min_row=1, max_row=max_row, values_only=True)
            found = find_header(rows, signature)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning("Unreadable worksheet %r skipped during header scan: %s", ws.title, e)
            continue
        if found is not None:
            logger.info(
                "Header found on sheet %r at row %d, column %d",
                ws.title, found.data_start_row - 1, found.data_start_column,
            )
            return HeaderLocation(found.data_start_row, found.data_start_column, ws.title)
    return None
