"""Pytest configuration for test isolation.

The CLIs and the batch runner work relative to the current directory (batch
discovery, ``output/logs``). Each test runs from its own temporary directory
so nothing leaks into the working tree or between tests.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolate_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_root_handlers():
    """setup_logging() attaches handlers to the root logger; drop any it added."""
    root = logging.getLogger()
    before = list(root.handlers)
    yield
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
