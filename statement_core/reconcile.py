"""
statement_core.reconcile
Rebuild logical transactions from the physical rows of a statement.

The export tool wraps long remarks onto extra rows that carry nothing but
narration text. Those continuation rows are folded back into the record they
belong to; every other row starts a new canonical record.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .config import (
    BALANCE_LABEL,
    CANONICAL_COLUMNS,
    CHEQUE_LABEL,
    DEPOSIT_LABEL,
    HEADER_SIGNATURE,
    REMARKS_LABEL,
    RESET_MARKER,
    SERIAL_LABEL,
    TXN_DATE_LABEL,
    VALUE_DATE_LABEL,
    WITHDRAWAL_LABEL,
)
from .errors import ReconciliationError
from .header_locator import HeaderLocation
from .utils import is_blank

logger = logging.getLogger(__name__)

# everything except remarks must be blank for a continuation row
_NON_REMARK_LABELS = (
    SERIAL_LABEL,
    VALUE_DATE_LABEL,
    TXN_DATE_LABEL,
    CHEQUE_LABEL,
    WITHDRAWAL_LABEL,
    DEPOSIT_LABEL,
    BALANCE_LABEL,
)

@dataclass
class SourceRow:
    row_number: int
    values: Dict[str, Any]

    def get(self, label: str) -> Any:
        return self.values.get(label)

@dataclass
class CanonicalRecord:
    date: Any = None
    narration: str = ""
    item: str = ""
    category: str = ""
    place: str = ""
    freq: str = ""
    for_: str = ""
    mop: str = ""
    amt_dr: Any = None
    chq_ref_no: Any = None
    value_dt: Any = None
    amt_cr: Any = None

    def mark_reset(self) -> None:
        self.item = self.category = self.place = self.freq = self.for_ = RESET_MARKER

    def to_row(self) -> List[Any]:
        """Values in CANONICAL_COLUMNS order."""
        return [
            self.date,
            self.narration,
            self.item,
            self.category,
            self.place,
            self.freq,
            self.for_,
            self.mop,
            self.amt_dr,
            self.chq_ref_no,
            self.value_dt,
            self.amt_cr,
        ]

    def as_dict(self) -> Dict[str, Any]:
        return dict(zip(CANONICAL_COLUMNS, self.to_row()))

@dataclass
class ReconcileStats:
    primary_rows: int = 0
    merged_rows: int = 0
    dropped_rows: int = 0
    reset_rows: int = 0
    dropped_row_numbers: List[int] = field(default_factory=list)

def read_source_rows(
    worksheet,
    location: HeaderLocation,
    signature: Sequence[str] = HEADER_SIGNATURE,
) -> Iterator[SourceRow]:
    """Yield signature-aligned rows from the data start down to the last populated row."""
    first_col = location.data_start_column
    last_col = first_col + len(signature) - 1
    max_row = worksheet.max_row
    if max_row < location.data_start_row:
        return
    for row_number, values in enumerate(
        worksheet.iter_rows(
            min_row=location.data_start_row,
            max_row=max_row,
            min_col=first_col,
            max_col=last_col,
            values_only=True,
        ),
        start=location.data_start_row,
    ):
        padded = list(values) + [None] * (len(signature) - len(values))
        yield SourceRow(row_number, dict(zip(signature, padded)))

def is_continuation_row(row: SourceRow) -> bool:
    # wrapped narration can be pure spacing; only a truly empty remarks cell disqualifies
    remarks = row.get(REMARKS_LABEL)
    if remarks is None or remarks == "":
        return False
    return all(is_blank(row.get(label)) for label in _NON_REMARK_LABELS)

def build_record(row: SourceRow, mop: str) -> CanonicalRecord:
    remarks = row.get(REMARKS_LABEL)
    record = CanonicalRecord(
        date=row.get(VALUE_DATE_LABEL),
        narration="" if remarks is None else str(remarks),
        mop=mop,
        amt_dr=row.get(WITHDRAWAL_LABEL),
        chq_ref_no=row.get(CHEQUE_LABEL),
        value_dt=row.get(TXN_DATE_LABEL),
        amt_cr=row.get(DEPOSIT_LABEL),
    )
    if RESET_MARKER in record.narration:
        record.mark_reset()
    return record

def reconcile_rows(rows: Iterable[SourceRow], mop: str) -> Tuple[List[CanonicalRecord], ReconcileStats]:
    """
    Turn source rows into canonical records, in source order.

    Continuation text is appended verbatim (no separator) to the most recent
    record. Continuation rows seen before any primary row have nowhere to go
    and are dropped with a warning.
    """
    records: List[CanonicalRecord] = []
    stats = ReconcileStats()
    current: Optional[CanonicalRecord] = None
    row_number: Optional[int] = None

    try:
        for row in rows:
            row_number = row.row_number
            if is_continuation_row(row):
                text = str(row.get(REMARKS_LABEL))
                if current is None:
                    stats.dropped_rows += 1
                    stats.dropped_row_numbers.append(row.row_number)
                    logger.warning("Row %d: continuation text before any transaction dropped: %r", row.row_number, text)
                    continue
                current.narration += text
                stats.merged_rows += 1
                continue

            current = build_record(row, mop)
            records.append(current)
            stats.primary_rows += 1
            if current.item == RESET_MARKER:
                stats.reset_rows += 1
    except Exception as e:
        where = f" at row {row_number}" if row_number is not None else ""
        raise ReconciliationError(f"Failed to reconcile rows{where}: {e}", row_number) from e

    return records, stats
