from __future__ import annotations

import os
from pathlib import Path

SOURCE_EXT = ".vox"
TARGET_EXT = ".svox"


def discover(input_root: Path, source_ext: str = SOURCE_EXT) -> list[Path]:
    """Recursively list regular files under ``input_root`` whose name ends with ``source_ext``.

    Order follows the directory listing and is not sorted. The match is
    case-sensitive. A missing root raises FileNotFoundError, a root that is a
    file raises NotADirectoryError. Symlinked directories are not descended
    into, so link cycles cannot recurse forever.
    """
    root = Path(input_root)
    if not root.exists():
        raise FileNotFoundError(f"input directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"input path is not a directory: {root}")

    found: list[Path] = []
    with os.scandir(root) as it:
        entries = list(it)
    for entry in entries:
        p = root / entry.name
        if entry.is_dir(follow_symlinks=False):
            found.extend(discover(p, source_ext))
        elif entry.is_file() and entry.name.endswith(source_ext):
            found.append(p)
    return found


def replace_ext(name: str, source_ext: str = SOURCE_EXT, target_ext: str = TARGET_EXT) -> str:
    # Only the trailing extension; "a.vox.backup.vox" -> "a.vox.backup.svox"
    if name.endswith(source_ext):
        return name[: -len(source_ext)] + target_ext
    return name


def derive_output_path(
    input_root: Path,
    output_root: Path,
    file_path: Path,
    source_ext: str = SOURCE_EXT,
    target_ext: str = TARGET_EXT,
) -> Path:
    """Map ``file_path`` under ``input_root`` onto the mirrored path under ``output_root``.

    Directory components are kept as-is; only the file name's trailing
    extension is swapped.
    """
    rel = Path(os.path.relpath(Path(file_path), Path(input_root)))
    return Path(output_root) / rel.parent / replace_ext(rel.name, source_ext, target_ext)
