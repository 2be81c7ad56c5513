"""
statement_core.utils
Small reusable helpers.
"""
from __future__ import annotations
from datetime import datetime
from typing import Any

def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False

def timestamp_line(prefix: str = "Generated") -> str:
    return f"{prefix}: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"
