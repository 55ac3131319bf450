# src/fileops/core/replace.py
import logging
import os
import re
import shutil
import tempfile
import time
from pathlib import Path
from typing import Iterable, List, Optional, Pattern

from fileops.core.bulk import BatchAccumulator, attempt
from fileops.core.classify import is_text_file
from fileops.core.ignore import CandidateFilter, load_ignore_spec
from fileops.core.matching import MatchOptions, compile_pattern, require_query
from fileops.core.paths import resolve_within_root
from fileops.core.scanner import ProjectScanner
from fileops.errors import FatalIO, FileOpsError, InvalidArgument, PathNotFound
from fileops.models import ReplaceReport

logger = logging.getLogger(__name__)


def backup_path_for(path: Path) -> Path:
    """<original>.backup.<epoch-ms>, bumped by a millisecond if that name is taken."""
    stamp = int(time.time() * 1000)
    candidate = path.with_name(f"{path.name}.backup.{stamp}")
    while candidate.exists():
        stamp += 1
        candidate = path.with_name(f"{path.name}.backup.{stamp}")
    return candidate


def _write_atomic(path: Path, content: str) -> None:
    fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def _substitute(pattern: Pattern[str], content: str, replace_query: str, options: MatchOptions):
    if options.regex:
        # Regex mode honours \1 and \g<name> group references
        return pattern.subn(replace_query, content)
    return pattern.subn(lambda _m: replace_query, content)


def replace_file(path: Path, search_query: str, replace_query: str, options: Optional[MatchOptions] = None) -> int:
    """
    Replaces every match in path and returns how many matches the original had.
    Nothing is written when the content would not change. Otherwise the
    original is copied to a backup first, and only then overwritten.
    Raises FatalIO / PathNotFound; see replace_in_file for the non-raising form.
    """
    require_query(search_query)
    if replace_query is None:
        raise InvalidArgument("Replace query is required")
    options = options or MatchOptions()
    pattern = compile_pattern(search_query, options)

    if not path.is_file():
        raise PathNotFound(str(path))
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            original = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FatalIO(f"Cannot read {path}: {e}") from e

    try:
        updated, count = _substitute(pattern, original, replace_query, options)
    except re.error as e:
        # Bad group reference in the replacement template
        raise InvalidArgument(f"Invalid replacement {replace_query!r}: {e}") from e
    if updated == original:
        return 0

    backup = backup_path_for(path)
    try:
        shutil.copy2(path, backup)
    except OSError as e:
        raise FatalIO(f"Cannot back up {path}: {e}") from e
    try:
        _write_atomic(path, updated)
    except OSError as e:
        raise FatalIO(f"Cannot write {path} (original kept in {backup.name}): {e}") from e

    logger.info("Replaced %d occurrences in %s (backup %s)", count, path, backup.name)
    return count


def replace_in_file(path: Path, search_query: str, replace_query: str, options: Optional[MatchOptions] = None) -> int:
    """Never raises: any failure is logged and reported as 0 replacements."""
    try:
        return replace_file(path, search_query, replace_query, options)
    except FileOpsError as e:
        logger.error("Error replacing in file %s: %s", path, e)
        return 0


def text_files_under(root_dir: Path) -> List[str]:
    """Every visible text-classified file, skipping dependency/build/VCS trees."""
    scanner = ProjectScanner(root_dir, CandidateFilter(ignore_spec=load_ignore_spec(), include_hidden=False))
    return [c.rel_path for c in scanner.scan() if is_text_file(c.rel_path) and c.path.is_file()]


def replace_across_files(
    root_dir: Path,
    search_query: str,
    replace_query: Optional[str],
    options: Optional[MatchOptions] = None,
    files: Optional[Iterable[str]] = None,
    replace_all: bool = False,
) -> ReplaceReport:
    """
    Runs replace_file over an explicit list, or every text file when replace_all.
    Each file is its own failure boundary; failures are collected, not raised.
    """
    require_query(search_query)
    if replace_query is None:
        raise InvalidArgument("Replace query is required")
    options = options or MatchOptions()
    # Validate the pattern once before touching any file
    compile_pattern(search_query, options)

    targets = text_files_under(root_dir) if replace_all else list(files or [])

    batch = BatchAccumulator()
    for rel in targets:
        batch.add(attempt(rel, lambda: replace_file(resolve_within_root(root_dir, rel), search_query, replace_query, options)))

    return ReplaceReport(
        total_replacements=batch.total_value,
        files_modified=batch.changed_count,
        errors=tuple(batch.errors),
        error_count=batch.error_count,
    )
