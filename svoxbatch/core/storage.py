from __future__ import annotations

import base64
import json
import re
from pathlib import Path

_LINE_BREAK_RE = re.compile(r"\r\n|\n")


def encode_buffer(data: bytes) -> str:
    """Base64 text for crossing the automation boundary."""
    return base64.b64encode(data).decode("ascii")


def normalize_line_endings(text: str) -> str:
    """Turn every ``\\n`` and ``\\r\\n`` into ``\\r\\n``. Lone ``\\r`` is left alone."""
    return _LINE_BREAK_RE.sub("\r\n", text)


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def write_bytes(path: Path, data: bytes) -> None:
    ensure_dir(path.parent)
    with open(path, "wb") as f:
        f.write(data)


def write_text_crlf(path: Path, text: str) -> int:
    """Normalize line breaks, write UTF-8 (overwriting), return the byte count."""
    data = normalize_line_endings(text).encode("utf-8")
    write_bytes(path, data)
    return len(data)


def atomic_write_json(path: Path, data: dict) -> None:
    """Write JSON atomically to the given path.

    Creates the parent directory, writes to a temp file in the same directory,
    then renames the temp file to the target.
    """
    ensure_dir(path.parent)
    tmp = path.with_suffix(path.suffix + ".tmp")
    s = json.dumps(data, ensure_ascii=False, indent=2)
    tmp.write_text(s, encoding="utf-8")
    tmp.replace(path)
