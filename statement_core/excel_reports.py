"""
statement_core.excel_reports
Excel creation (openpyxl).
"""
from __future__ import annotations
from pathlib import Path
from typing import Dict, Sequence

from .config import CANONICAL_COLUMNS, OUTPUT_SHEET_NAME
from .reconcile import CanonicalRecord

COLUMN_WIDTHS: Dict[str, int] = {
    "Date": 12,
    "Narration": 60,
    "MOP": 20,
    "Amt(Dr)": 14,
    "Chq./Ref.No.": 18,
    "Value Dt": 12,
    "Amt(Cr)": 14,
}

def require_openpyxl():
    try:
        from openpyxl import Workbook  # noqa
        from openpyxl.styles import Font  # noqa
        from openpyxl.utils import get_column_letter  # noqa
        return Workbook, Font, get_column_letter
    except Exception:
        raise SystemExit("Missing dependency: openpyxl\nInstall with: pip3 install openpyxl\n")

def write_formatted_workbook(
    records: Sequence[CanonicalRecord],
    xlsx_path: Path,
    sheet_name: str = OUTPUT_SHEET_NAME,
) -> Path:
    Workbook, Font, get_column_letter = require_openpyxl()
    BOLD = Font(bold=True)

    wb = Workbook()
    try:
        ws = wb.active
        ws.title = sheet_name[:31]

        ws.append(list(CANONICAL_COLUMNS))
        for c in range(1, len(CANONICAL_COLUMNS) + 1):
            ws.cell(row=1, column=c).font = BOLD
        ws.freeze_panes = "A2"

        for rec in records:
            ws.append(rec.to_row())

        for idx, name in enumerate(CANONICAL_COLUMNS, start=1):
            ws.column_dimensions[get_column_letter(idx)].width = COLUMN_WIDTHS.get(name, 10)

        xlsx_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(xlsx_path)
    finally:
        wb.close()
    return xlsx_path
