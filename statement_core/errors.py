"""
statement_core.errors
Exception types raised across the pipeline.

A missing header is not an error: locate_header() returns None and the file
is skipped with a notice.
"""
from __future__ import annotations

class StatementError(Exception):
    """Base class for all statement-processing failures."""

class ParameterError(StatementError):
    """Missing or invalid CLI input. Fatal to a single-file run."""

class ConversionError(StatementError):
    """The legacy .xls -> .xlsx bridge failed for one file."""

class ReconciliationError(StatementError):
    """Unexpected fault while turning source rows into canonical records."""

    def __init__(self, message: str, row_number: int | None = None):
        super().__init__(message)
        self.row_number = row_number
