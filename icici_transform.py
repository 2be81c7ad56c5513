#!/usr/bin/env python3
"""
icici_transform.py

Cleans ONE ICICI statement export:
1) Converts the legacy .xls to .xlsx      -> <name>_ConvertedFromXls.xlsx
2) Finds the transaction header block (anywhere in the first 4 columns)
3) Folds wrapped narration rows back into their transaction
4) Writes the canonical sheet "FormattedData"
                                          -> <name>_ConvertedFromXls_Transformed.xlsx

The MOP column is taken from the file name: ICICI_DC_Savings_Jan2024.xls -> ICICI_DC_Savings
An .xlsx input skips step 1 and is written to <name>_Transformed.xlsx.

Exit codes: 0 ok, 1 bad/missing input path, 2 file skipped or failed.

Usage examples:
  python3 icici_transform.py ICICI_DC_Savings_Jan2024.xls
  python3 icici_transform.py statement.xls --converter soffice
  python3 icici_transform.py statement.xls --summary-pdf run_summary.pdf
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from statement_core.cli_common import (
    EXIT_PARAMETER_ERROR,
    add_common_args,
    exit_code_for,
    print_snapshot,
    write_summary_if_requested,
)
from statement_core.convert import get_converter
from statement_core.errors import ParameterError
from statement_core.logging_setup import setup_logging
from statement_core.pipeline import process_file


def resolve_input_path(path_str: str) -> Path:
    if not path_str or not path_str.strip():
        raise ParameterError("inputFilePath is required")
    p = Path(path_str).expanduser().resolve()
    if not p.exists():
        raise ParameterError(f"File not found: {p}")
    if not p.is_file():
        raise ParameterError(f"Not a file: {p}")
    return p


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="icici_transform.py",
        description="Convert an ICICI .xls statement and rebuild clean, one-row-per-transaction data.",
        epilog=(
            "Examples:\n"
            "  icici_transform.py ICICI_DC_Savings_Jan2024.xls\n"
            "  icici_transform.py statement.xls --converter soffice --summary-pdf summary.pdf\n"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("input_file", help="Statement export (.xls, or an already converted .xlsx)")
    add_common_args(p)
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        input_path = resolve_input_path(args.input_file)
    except ParameterError as e:
        print(f"ERROR: {e}")
        return EXIT_PARAMETER_ERROR

    setup_logging(Path(args.log_dir))
    result = process_file(input_path, get_converter(args.converter))
    logging.info("Finished %s with status %s", input_path.name, result.status)

    print("✅ Done" if result.ok else "⚠️ Finished with problems")
    print(f"Input: {input_path}")
    print_snapshot([result])
    write_summary_if_requested(args.summary_pdf, [result], input_path.parent)

    return exit_code_for([result])


if __name__ == "__main__":
    raise SystemExit(main())
