"""
statement_core.pdf_reports
One-page run summary (reportlab).
"""
from __future__ import annotations
from pathlib import Path
from typing import Sequence

from .utils import timestamp_line

def require_reportlab():
    try:
        from reportlab.lib.pagesizes import letter  # noqa
        from reportlab.lib.units import inch  # noqa
        from reportlab.pdfgen import canvas  # noqa
        return letter, inch, canvas
    except Exception:
        raise SystemExit("Missing dependency: reportlab\nInstall with: pip3 install reportlab\n")

def write_run_summary_pdf(pdf_path: Path, results: Sequence, title: str = "ICICI Statement Cleaner — Run Summary") -> Path:
    """
    Ready-to-print summary: one line per file with MOP, status and counts,
    then totals. Long runs continue onto extra pages.
    """
    letter, inch, canvas = require_reportlab()
    pdf_path.parent.mkdir(parents=True, exist_ok=True)

    c = canvas.Canvas(str(pdf_path), pagesize=letter)
    width, height = letter

    left = 0.75 * inch
    right = width - left
    top = height - 0.75 * inch
    bottom = 0.9 * inch
    line = 0.26 * inch

    cols = [
        ("File", left),
        ("MOP", left + 3.0 * inch),
        ("Status", left + 4.5 * inch),
    ]

    def table_header(y: float) -> float:
        c.setFont("Helvetica-Bold", 10)
        for label, x in cols:
            c.drawString(x, y, label)
        c.drawRightString(right, y, "Records / Merged / Dropped")
        return y - 0.22 * inch

    c.setFont("Helvetica-Bold", 16)
    c.drawString(left, top, title)
    c.setFont("Helvetica", 10)
    c.drawString(left, top - 0.35 * inch, timestamp_line("Generated (local)"))
    c.drawString(left, top - 0.55 * inch, f"Files processed: {len(results)}")

    y = table_header(top - 1.0 * inch)
    c.setFont("Helvetica", 10)

    total_records = total_merged = total_dropped = 0
    failed = 0
    for r in results:
        if y < bottom:
            c.showPage()
            y = table_header(top)
            c.setFont("Helvetica", 10)
        c.drawString(cols[0][1], y, r.source.name[:48])
        c.drawString(cols[1][1], y, r.mop[:24])
        c.drawString(cols[2][1], y, r.status)
        c.drawRightString(right, y, f"{len(r.records)}  /  {r.stats.merged_rows}  /  {r.stats.dropped_rows}")
        total_records += len(r.records)
        total_merged += r.stats.merged_rows
        total_dropped += r.stats.dropped_rows
        if not r.ok:
            failed += 1
        y -= line

    if y < bottom + 1.0 * inch:
        c.showPage()
        y = top

    y -= 0.1 * inch
    c.setFont("Helvetica-Bold", 11)
    c.drawString(left, y, "TOTAL")
    c.drawRightString(right, y, f"{total_records}  /  {total_merged}  /  {total_dropped}")
    y -= 0.3 * inch
    c.drawString(left, y, "FILES SKIPPED / FAILED")
    c.drawRightString(right, y, str(failed))
    y -= 0.45 * inch

    c.setFont("Helvetica", 9)
    c.drawString(left, y, "Notes:")
    y -= 0.18 * inch
    c.drawString(left, y, "- Merged = wrapped narration rows folded into the previous transaction.")
    y -= 0.18 * inch
    c.drawString(left, y, "- Dropped = narration rows found before the first transaction (see log for row numbers).")

    c.showPage()
    c.save()
    return pdf_path
