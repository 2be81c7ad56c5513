"""
statement_core.cli_common
Shared CLI bits: common flags, console snapshot, exit codes.
"""
from __future__ import annotations
import argparse
from pathlib import Path
from typing import Sequence

from .config import DEFAULT_LOG_DIR
from .convert import CONVERTERS
from .pdf_reports import write_run_summary_pdf

EXIT_OK = 0
EXIT_PARAMETER_ERROR = 1
EXIT_FILES_FAILED = 2

def add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--converter",
        choices=sorted(CONVERTERS),
        default="xlrd",
        help="Legacy .xls bridge: xlrd (pure Python) or soffice (LibreOffice headless)",
    )
    p.add_argument(
        "--summary-pdf",
        default="",
        help="Create a ready-to-print run summary PDF at the given path/filename",
    )
    p.add_argument(
        "--log-dir",
        default=DEFAULT_LOG_DIR,
        help=f"Folder for the per-run log file (default: {DEFAULT_LOG_DIR})",
    )

def print_snapshot(results: Sequence) -> None:
    print("\n📌 Run snapshot")
    print("-" * 72)
    for r in results:
        print(f"{r.source.name[:36]:36s} {r.status:22s} {len(r.records):6d} rows")
        if r.transformed is not None:
            print(f"   📤 {r.transformed}")
        elif r.message:
            print(f"   ⚠️  {r.message}")
    print("-" * 72)
    ok = sum(1 for r in results if r.ok)
    print(f"{'FILES OK':36s} {ok:6d}")
    print(f"{'FILES SKIPPED / FAILED':36s} {len(results) - ok:6d}\n")

def write_summary_if_requested(summary_pdf: str, results: Sequence, base_dir: Path) -> None:
    if not summary_pdf:
        return
    pdf_path = Path(summary_pdf).expanduser()
    if not pdf_path.is_absolute():
        pdf_path = base_dir / pdf_path
    write_run_summary_pdf(pdf_path, results)
    print(f"🧾 Summary PDF created: {pdf_path}")

def exit_code_for(results: Sequence) -> int:
    return EXIT_OK if all(r.ok for r in results) else EXIT_FILES_FAILED
