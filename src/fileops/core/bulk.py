# src/fileops/core/bulk.py
import logging
import re
import shutil
from enum import Enum
from pathlib import Path
from typing import Any, Callable, List, Mapping, Optional, Sequence

from fileops.config import COPIES_DIR_NAME, ERROR_REPORT_LIMIT, MOVED_DIR_NAME
from fileops.core.paths import resolve_within_root
from fileops.errors import FileOpsError, InvalidArgument
from fileops.models import BulkActionResult, FileError, FileOutcome

logger = logging.getLogger(__name__)


class BulkOperation(str, Enum):
    COPY = "copy"
    MOVE = "move"
    DELETE = "delete"
    DUPLICATE = "duplicate"
    RENAME = "rename"
    COMPRESS = "compress"

    @classmethod
    def parse(cls, name: Optional[str]) -> "BulkOperation":
        try:
            return cls(name)
        except ValueError:
            raise InvalidArgument(f"Unsupported operation: {name}") from None


def attempt(file: str, action: Callable[[], int]) -> FileOutcome:
    """The per-file failure boundary: turns one file's error into a failed outcome."""
    try:
        return FileOutcome.success(file, action() or 0)
    except (OSError, ValueError, re.error, FileOpsError) as e:
        logger.warning("Error processing %s: %s", file, e)
        return FileOutcome.failure(file, str(e))


class BatchAccumulator:
    """Folds per-file outcomes into counts and a capped error list."""

    def __init__(self, error_limit: int = ERROR_REPORT_LIMIT):
        self.error_limit = error_limit
        self.success_count = 0
        self.error_count = 0
        self.total_value = 0
        self.changed_count = 0
        self.errors: List[FileError] = []

    def add(self, outcome: FileOutcome) -> None:
        if outcome.ok:
            self.success_count += 1
            self.total_value += outcome.value
            if outcome.value > 0:
                self.changed_count += 1
            return
        self.error_count += 1
        if len(self.errors) < self.error_limit:
            self.errors.append(FileError(file=outcome.file, error=outcome.error or "unknown error"))

    def to_bulk_result(self, operation: str) -> BulkActionResult:
        return BulkActionResult(
            operation=operation,
            success_count=self.success_count,
            error_count=self.error_count,
            errors=tuple(self.errors),
        )


def duplicate_name(name: str) -> str:
    """'notes.txt' -> 'notes_copy.txt'; 'Makefile' -> 'Makefile_copy'."""
    return re.sub(r"(\.[^.]+)?$", r"_copy\1", name, count=1)


class BulkOperationExecutor:
    def __init__(self, root_dir: Path):
        self.root_dir = root_dir

    def _copy_into(self, subdir: str, file: str, move: bool) -> int:
        source = resolve_within_root(self.root_dir, file)
        dest = self.root_dir / subdir / file
        dest.parent.mkdir(parents=True, exist_ok=True)
        if move:
            source.rename(dest)
        else:
            shutil.copyfile(source, dest)
        return 1

    def _delete(self, file: str) -> int:
        resolve_within_root(self.root_dir, file).unlink()
        return 1

    def _duplicate(self, file: str) -> int:
        source = resolve_within_root(self.root_dir, file)
        shutil.copyfile(source, source.with_name(duplicate_name(source.name)))
        return 1

    def _rename(self, file: str, pattern: "re.Pattern[str]", replacement: str) -> int:
        source = resolve_within_root(self.root_dir, file)
        new_name = pattern.sub(replacement, source.name)
        if not new_name or "/" in new_name or new_name in (".", ".."):
            raise ValueError(f"Invalid new name for {file}: {new_name!r}")
        if new_name != source.name:
            source.rename(source.with_name(new_name))
        return 1

    def _compress(self, file: str) -> int:
        logger.info("Would compress: %s", file)
        return 1

    def _action_for(self, operation: BulkOperation, options: Mapping[str, Any]) -> Callable[[str], int]:
        if operation is BulkOperation.COPY:
            return lambda f: self._copy_into(COPIES_DIR_NAME, f, move=False)
        if operation is BulkOperation.MOVE:
            return lambda f: self._copy_into(MOVED_DIR_NAME, f, move=True)
        if operation is BulkOperation.DELETE:
            return self._delete
        if operation is BulkOperation.DUPLICATE:
            return self._duplicate
        if operation is BulkOperation.RENAME:
            raw_pattern = options.get("pattern")
            replacement = options.get("replacement")
            if not raw_pattern or replacement is None:
                raise InvalidArgument("Rename requires both 'pattern' and 'replacement'")
            try:
                pattern = re.compile(raw_pattern)
            except re.error as e:
                raise InvalidArgument(f"Invalid rename pattern {raw_pattern!r}: {e}") from e
            return lambda f: self._rename(f, pattern, replacement)
        return self._compress

    def execute(
        self,
        operation: Optional[str],
        files: Sequence[str],
        options: Optional[Mapping[str, Any]] = None,
    ) -> BulkActionResult:
        """
        Applies operation to each file independently.
        Arguments are validated up front; after that, one file's failure
        is recorded and the batch carries on.
        """
        op = BulkOperation.parse(operation)
        if not files:
            raise InvalidArgument("Operation and files are required")
        action = self._action_for(op, options or {})

        batch = BatchAccumulator()
        for file in files:
            batch.add(attempt(file, lambda: action(file)))

        logger.info("Bulk %s: %d succeeded, %d failed", op.value, batch.success_count, batch.error_count)
        return batch.to_bulk_result(op.value)

