# src/fileops/core/diff.py
from pathlib import Path
from typing import List, Sequence, Tuple

from fileops.errors import FatalIO, PathNotFound
from fileops.models import DiffRecord, DiffStats


def _read(path: Path) -> bytes:
    if not path.is_file():
        raise PathNotFound(str(path))
    try:
        return path.read_bytes()
    except OSError as e:
        raise FatalIO(f"Cannot read {path}: {e}") from e


def _decode(raw: bytes, path: Path) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FatalIO(f"{path} is not utf-8 text: {e}") from e


def diff_lines(left: Sequence[str], right: Sequence[str]) -> List[DiffRecord]:
    """Index-aligned comparison; a side with no line at an index reads as ''."""
    records: List[DiffRecord] = []
    for i in range(max(len(left), len(right))):
        left_line = left[i] if i < len(left) else ""
        right_line = right[i] if i < len(right) else ""
        if left_line == right_line:
            continue
        if i >= len(left):
            kind = "added"
        elif i >= len(right):
            kind = "removed"
        else:
            kind = "modified"
        records.append(DiffRecord(line=i + 1, type=kind, left=left_line, right=right_line))
    return records


def diff_files(left_path: Path, right_path: Path) -> Tuple[List[DiffRecord], DiffStats]:
    left_raw = _read(left_path)
    right_raw = _read(right_path)
    left_lines = _decode(left_raw, left_path).split("\n")
    right_lines = _decode(right_raw, right_path).split("\n")

    changes = diff_lines(left_lines, right_lines)
    stats = DiffStats(
        total_lines=max(len(left_lines), len(right_lines)),
        changed_lines=len(changes),
        left_size=len(left_raw),
        right_size=len(right_raw),
    )
    return changes, stats
