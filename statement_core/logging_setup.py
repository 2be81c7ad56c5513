"""
statement_core.logging_setup
Per-run log file + console output.
"""
from __future__ import annotations
import logging
from datetime import datetime
from pathlib import Path

def setup_logging(log_dir: Path, name: str = "icici") -> Path:
    log_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = log_dir / f"{name}_{stamp}.log"

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # avoid duplicate handlers if called twice in one process
    if not root.handlers:
        fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")

        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.INFO)
        fh.setFormatter(fmt)

        sh = logging.StreamHandler()
        sh.setLevel(logging.INFO)
        sh.setFormatter(fmt)

        root.addHandler(fh)
        root.addHandler(sh)

    logging.info("Logging started: %s", log_path)
    return log_path
