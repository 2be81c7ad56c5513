"""
statement_core.paths
File naming + batch discovery.
"""
from __future__ import annotations
from pathlib import Path
from typing import List

from .config import (
    BATCH_GLOB,
    CONVERTED_SUFFIX,
    MOP_SEGMENTS,
    TRANSFORMED_SUFFIX,
    XLSX_EXT,
)

def mop_from_filename(path: Path | str) -> str:
    """
    ICICI_DC_Savings_Jan2024.xls -> ICICI_DC_Savings
    Names with fewer segments are used whole.
    """
    stem = Path(path).stem
    return "_".join(stem.split("_")[:MOP_SEGMENTS])

def converted_path(source: Path) -> Path:
    return source.with_name(f"{source.stem}{CONVERTED_SUFFIX}{XLSX_EXT}")

def transformed_path(xlsx_path: Path) -> Path:
    return xlsx_path.with_name(f"{xlsx_path.stem}{TRANSFORMED_SUFFIX}{XLSX_EXT}")

def discover_batch_files(directory: Path) -> List[Path]:
    # glob "*.xls" does not pick up .xlsx
    return sorted(p for p in directory.glob(BATCH_GLOB) if p.is_file())
