from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Optional


def _stamp(msg: str) -> str:
    ts = time.strftime("%Y-%m-%d %H:%M:%S")
    return f"[{ts}] {msg}"


def log_line(log_path: Optional[Path], msg: str) -> None:
    """Append a timestamped line to a log file (best-effort, no-op without a path)."""
    if log_path is None:
        return
    try:
        line = _stamp(msg) + "\n"
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with open(log_path, "ab") as lf:
            lf.write(line.encode("utf-8", errors="ignore"))
    except Exception:
        pass


def console(msg: str) -> None:
    """Print a timestamped message to stdout (best-effort)."""
    try:
        print(_stamp(msg), flush=True)
    except Exception:
        pass


def console_error(msg: str) -> None:
    try:
        print(_stamp(msg), file=sys.stderr, flush=True)
    except Exception:
        pass


def log_info(log_path: Optional[Path], msg: str) -> None:
    log_line(log_path, msg)
    console(msg)


def log_error(log_path: Optional[Path], msg: str) -> None:
    log_line(log_path, msg)
    console_error(msg)


def log_exception(log_path: Optional[Path], prefix: str, exc: BaseException) -> None:
    try:
        log_error(log_path, f"{prefix}: {exc}")
    except Exception:
        pass
