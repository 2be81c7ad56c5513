"""
statement_core.pipeline
One file: convert -> locate header -> reconcile -> write FormattedData.
Many files: the same, strictly one after another.

Failures are isolated per file: whatever goes wrong is logged, recorded on
the FileResult and the batch moves on. Nothing is retried and partially
written converted files are left where they are.
"""
from __future__ import annotations
import logging
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .config import HEADER_SIGNATURE, XLSX_EXT
from .convert import LegacyConverter
from .errors import ConversionError, ReconciliationError
from .excel_reports import write_formatted_workbook
from .header_locator import locate_header
from .paths import converted_path, discover_batch_files, mop_from_filename, transformed_path
from .reconcile import CanonicalRecord, ReconcileStats, read_source_rows, reconcile_rows

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_CONVERSION_ERROR = "conversion_error"
STATUS_HEADER_NOT_FOUND = "header_not_found"
STATUS_RECONCILIATION_ERROR = "reconciliation_error"

@dataclass
class FileResult:
    source: Path
    mop: str
    status: str = STATUS_OK
    converted: Optional[Path] = None
    transformed: Optional[Path] = None
    records: List[CanonicalRecord] = field(default_factory=list)
    stats: ReconcileStats = field(default_factory=ReconcileStats)
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

def _load_workbook(xlsx_path: Path):
    from openpyxl import load_workbook
    from openpyxl.utils.exceptions import InvalidFileException
    try:
        return load_workbook(xlsx_path, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError) as e:
        raise ConversionError(f"Not a readable .xlsx: {xlsx_path.name} ({e})") from e

def transform_workbook(
    xlsx_path: Path,
    out_path: Path,
    mop: str,
    result: FileResult,
    signature: Sequence[str] = HEADER_SIGNATURE,
) -> FileResult:
    """Locate, reconcile and write for an already-open-format workbook."""
    wb = _load_workbook(xlsx_path)
    try:
        location = locate_header(wb, signature)
        if location is None:
            result.status = STATUS_HEADER_NOT_FOUND
            result.message = "header signature not found in any worksheet"
            logger.warning("Skipping %s: %s", xlsx_path.name, result.message)
            return result

        ws = wb[location.sheet_name] if location.sheet_name else wb.active
        records, stats = reconcile_rows(read_source_rows(ws, location, signature), mop)
    finally:
        wb.close()

    try:
        write_formatted_workbook(records, out_path)
    except ValueError as e:
        # openpyxl rejects control characters in cell text
        raise ReconciliationError(f"Could not write {out_path.name}: {e}") from e
    result.records = records
    result.stats = stats
    result.transformed = out_path
    logger.info(
        "Wrote %s: %d records (%d continuation rows merged, %d dropped)",
        out_path.name, len(records), stats.merged_rows, stats.dropped_rows,
    )
    return result

def process_file(
    source: Path,
    converter: LegacyConverter,
    mop: Optional[str] = None,
    signature: Sequence[str] = HEADER_SIGNATURE,
) -> FileResult:
    """
    Run the whole pipeline for one statement and report what happened.

    .xlsx inputs skip conversion. Only ConversionError, ReconciliationError
    and OSError from reading/writing are absorbed here; anything else is a bug
    and propagates.
    """
    source = Path(source)
    result = FileResult(source=source, mop=mop if mop is not None else mop_from_filename(source))
    logger.info("Processing %s (MOP=%s)", source.name, result.mop)

    if source.suffix.lower() == XLSX_EXT:
        xlsx_path = source
    else:
        try:
            xlsx_path = converter.convert(source, converted_path(source))
        except ConversionError as e:
            result.status = STATUS_CONVERSION_ERROR
            result.message = str(e)
            logger.error("Conversion failed for %s: %s", source.name, e)
            return result
        result.converted = xlsx_path

    try:
        return transform_workbook(xlsx_path, transformed_path(xlsx_path), result.mop, result, signature)
    except ConversionError as e:
        result.status = STATUS_CONVERSION_ERROR
        result.message = str(e)
        logger.error("Could not open %s: %s", xlsx_path.name, e)
    except ReconciliationError as e:
        result.status = STATUS_RECONCILIATION_ERROR
        result.message = str(e)
        logger.exception("Reconciliation failed for %s", source.name)
    except OSError as e:
        result.status = STATUS_RECONCILIATION_ERROR
        result.message = f"I/O error: {e}"
        logger.error("I/O error while transforming %s: %s", source.name, e)
    return result

def run_batch(directory: Path, converter: LegacyConverter) -> List[FileResult]:
    files = discover_batch_files(directory)
    if not files:
        logger.info("No matching statements in %s", directory)
        return []

    logger.info("Found %d statement(s) in %s", len(files), directory)
    results: List[FileResult] = []
    for path in files:
        results.append(process_file(path, converter))
    return results
