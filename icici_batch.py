#!/usr/bin/env python3
"""
icici_batch.py

Batch mode: cleans every ICICI_DC_*.xls in the CURRENT folder, one file at a
time. Each file is processed exactly like icici_transform.py; a file that
fails to convert, has no recognisable header, or breaks during
reconciliation is logged and skipped, and the batch carries on.

Outputs (next to each input):
  <name>_ConvertedFromXls.xlsx
  <name>_ConvertedFromXls_Transformed.xlsx   (sheet "FormattedData")

Exit codes: 0 all ok (or nothing to do), 2 at least one file skipped/failed.

Usage examples:
  cd ~/Downloads/statements && python3 icici_batch.py
  python3 icici_batch.py --converter soffice --summary-pdf batch_summary.pdf
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from statement_core.cli_common import (
    EXIT_OK,
    add_common_args,
    exit_code_for,
    print_snapshot,
    write_summary_if_requested,
)
from statement_core.config import BATCH_GLOB
from statement_core.convert import get_converter
from statement_core.logging_setup import setup_logging
from statement_core.pipeline import run_batch


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="icici_batch.py",
        description=f"Clean every {BATCH_GLOB} statement in the current folder.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    add_common_args(p)
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    base_dir = Path.cwd()

    setup_logging(Path(args.log_dir))
    results = run_batch(base_dir, get_converter(args.converter))

    if not results:
        print(f"Nothing to do: no {BATCH_GLOB} files in {base_dir}")
        return EXIT_OK

    logging.info("Batch finished: %d file(s)", len(results))
    print("✅ Batch done")
    print_snapshot(results)
    write_summary_if_requested(args.summary_pdf, results, base_dir)

    return exit_code_for(results)


if __name__ == "__main__":
    raise SystemExit(main())
