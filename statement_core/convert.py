"""
statement_core.convert
Legacy .xls -> .xlsx bridge.

Everything downstream works on openpyxl workbooks, so the only job here is
"given a legacy binary spreadsheet, produce an equivalent .xlsx". Two
backends:
  - XlrdConverter   : pure Python, reads with xlrd and writes with openpyxl
  - SofficeConverter: shells out to LibreOffice (headless) for files xlrd
                      cannot read
"""
from __future__ import annotations
import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Dict, Protocol, Type

from .config import SOFFICE_BINARY, SOFFICE_TIMEOUT_SEC, XLSX_EXT
from .errors import ConversionError

logger = logging.getLogger(__name__)

class LegacyConverter(Protocol):
    def convert(self, source: Path, target: Path) -> Path:
        ...

def _require_source(source: Path) -> None:
    if not source.exists():
        raise ConversionError(f"Legacy file not found: {source}")

class XlrdConverter:
    """Copy every sheet, in order, cell by cell."""

    def convert(self, source: Path, target: Path) -> Path:
        _require_source(source)
        try:
            import xlrd
            from openpyxl import Workbook
            from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
        except ImportError as e:
            raise ConversionError(f"xlrd/openpyxl not installed ({e}); cannot convert {source.name}") from e

        # corrupt files surface as XLRDError, CompDocError, struct.error, IndexError...
        try:
            book = xlrd.open_workbook(str(source), on_demand=True)
        except Exception as e:
            raise ConversionError(f"Could not read {source.name}: {e}") from e

        wb = Workbook()
        try:
            wb.remove(wb.active)
            for idx in range(book.nsheets):
                sheet = book.sheet_by_index(idx)
                ws = wb.create_sheet(title=sheet.name[:31])
                for r in range(sheet.nrows):
                    ws.append([
                        self._cell_value(xlrd, book, sheet.cell(r, c), ILLEGAL_CHARACTERS_RE)
                        for c in range(sheet.ncols)
                    ])
                book.unload_sheet(idx)
            if not wb.worksheets:
                wb.create_sheet()
            target.parent.mkdir(parents=True, exist_ok=True)
            wb.save(target)
        except Exception as e:
            raise ConversionError(f"Failed converting {source.name}: {e}") from e
        finally:
            wb.close()
            book.release_resources()

        logger.info("Converted %s -> %s (xlrd)", source.name, target.name)
        return target

    @staticmethod
    def _cell_value(xlrd, book, cell, illegal_re) -> Any:
        ctype = cell.ctype
        if ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
            return None
        if ctype == xlrd.XL_CELL_DATE:
            return xlrd.xldate.xldate_as_datetime(cell.value, book.datemode)
        if ctype == xlrd.XL_CELL_BOOLEAN:
            return bool(cell.value)
        if ctype == xlrd.XL_CELL_ERROR:
            return xlrd.error_text_from_code.get(cell.value, "#ERR")
        if isinstance(cell.value, str):
            return illegal_re.sub("", cell.value)
        return cell.value

class SofficeConverter:
    """LibreOffice headless conversion into a scratch dir, then move into place."""

    def __init__(self, binary: str = SOFFICE_BINARY, timeout: int = SOFFICE_TIMEOUT_SEC):
        self.binary = binary
        self.timeout = timeout

    def convert(self, source: Path, target: Path) -> Path:
        _require_source(source)
        with tempfile.TemporaryDirectory(prefix="xls2xlsx_") as tmp:
            cmd = [
                self.binary,
                "--headless",
                "--convert-to", "xlsx",
                "--outdir", tmp,
                str(source),
            ]
            try:
                subprocess.run(cmd, check=True, capture_output=True, text=True, timeout=self.timeout)
            except FileNotFoundError as e:
                raise ConversionError(f"'{self.binary}' not found; install LibreOffice or use --converter xlrd") from e
            except subprocess.TimeoutExpired as e:
                raise ConversionError(f"{self.binary} timed out after {self.timeout}s on {source.name}") from e
            except subprocess.CalledProcessError as e:
                detail = (e.stderr or "").strip() or f"exit code {e.returncode}"
                raise ConversionError(f"{self.binary} failed on {source.name}: {detail}") from e

            produced = Path(tmp) / f"{source.stem}{XLSX_EXT}"
            if not produced.exists():
                raise ConversionError(f"{self.binary} produced no output for {source.name}")
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.move(str(produced), str(target))

        logger.info("Converted %s -> %s (soffice)", source.name, target.name)
        return target

CONVERTERS: Dict[str, Type] = {
    "xlrd": XlrdConverter,
    "soffice": SofficeConverter,
}

def get_converter(name: str) -> LegacyConverter:
    try:
        return CONVERTERS[name]()
    except KeyError:
        raise ValueError(f"Unknown converter: {name} (choose from {', '.join(CONVERTERS)})") from None
