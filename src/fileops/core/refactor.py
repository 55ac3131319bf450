# src/fileops/core/refactor.py
import logging
from pathlib import Path
from typing import Iterable, Optional

from fileops.core.bulk import BatchAccumulator, attempt
from fileops.core.classify import is_code_file
from fileops.core.matching import MatchOptions, require_query
from fileops.core.paths import resolve_within_root
from fileops.core.replace import replace_file
from fileops.errors import InvalidArgument
from fileops.models import RefactorReport

logger = logging.getLogger(__name__)

RENAME_SYMBOL = "rename-symbol"
REFACTOR_TYPES = (RENAME_SYMBOL,)

# Textual rename: whole identifier, exact case, no AST
_SYMBOL_OPTIONS = MatchOptions(whole_word=True, case_sensitive=True)


def rename_symbol(root_dir: Path, files: Iterable[str], old_name: Optional[str], new_name: Optional[str]) -> RefactorReport:
    """Whole-word rename of old_name in the listed code files; other files are skipped."""
    require_query(old_name, "Old name")
    require_query(new_name, "New name")

    batch = BatchAccumulator()
    for rel in files:
        if not is_code_file(rel):
            logger.debug("Skipping non-code file %s", rel)
            continue
        batch.add(attempt(rel, lambda: replace_file(resolve_within_root(root_dir, rel), old_name, new_name, _SYMBOL_OPTIONS)))

    return RefactorReport(type=RENAME_SYMBOL, processed_files=batch.changed_count)


def run_refactor(root_dir: Path, refactor_type: str, files: Iterable[str], old_name: Optional[str] = None, new_name: Optional[str] = None) -> RefactorReport:
    if refactor_type == RENAME_SYMBOL:
        return rename_symbol(root_dir, files, old_name, new_name)
    raise InvalidArgument(f"Unsupported refactoring type: {refactor_type}")
