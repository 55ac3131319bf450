# src/fileops/core/history.py
import json
import logging
import os
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from fileops.config import HISTORY_FILE_SUFFIX, HISTORY_LIMIT
from fileops.errors import FatalIO
from fileops.models import HistoryEntry

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class JsonDocumentStore:
    """One JSON document per key, stored as <directory>/<key><suffix>."""

    def __init__(self, directory: Path, suffix: str = ".json"):
        self.directory = Path(directory)
        self.suffix = suffix

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}{self.suffix}"

    def load(self, key: str) -> Optional[Any]:
        """The stored document, or None when there is none. Raises OSError/ValueError."""
        p = self.path_for(key)
        if not p.exists():
            return None
        return json.loads(p.read_text(encoding="utf-8"))

    def save(self, key: str, document: Any) -> None:
        p = self.path_for(key)
        p.parent.mkdir(parents=True, exist_ok=True)
        tmp = p.with_name(p.name + ".tmp")
        tmp.write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp, p)

    def delete(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)


class OperationHistoryLog:
    """
    Newest-first journal of mutating operations, at most `limit` entries per project.

    append() is a read-modify-write of one document with no locking: two
    concurrent writers for the same project can lose an entry. Callers that
    mutate one project concurrently must serialize those calls themselves.
    """

    def __init__(self, store: JsonDocumentStore, limit: int = HISTORY_LIMIT):
        self.store = store
        self.limit = limit

    @classmethod
    def in_directory(cls, directory: Path) -> "OperationHistoryLog":
        return cls(JsonDocumentStore(directory, suffix=HISTORY_FILE_SUFFIX))

    def load(self, project: str) -> List[Dict[str, Any]]:
        try:
            document = self.store.load(project)
        except (OSError, ValueError) as e:
            raise FatalIO(f"Cannot read history for {project}: {e}") from e
        if document is None:
            return []
        if not isinstance(document, list):
            raise FatalIO(f"History for {project} is not a list")
        return document

    def append(self, project: str, entry: HistoryEntry) -> Optional[Dict[str, Any]]:
        """
        Prepends a timestamped copy of entry and truncates to the limit.
        Journal failures are logged and swallowed so they never fail the
        operation being journaled; returns the stored record, or None.
        """
        record = replace(entry, timestamp=utc_timestamp()).to_dict()
        try:
            try:
                history = self.load(project)
            except FatalIO as e:
                logger.warning("Discarding unreadable history: %s", e)
                history = []
            history.insert(0, record)
            self.store.save(project, history[: self.limit])
        except (OSError, TypeError) as e:
            logger.warning("Error saving operation history for %s: %s", project, e)
            return None
        return record

    def clear(self, project: str) -> None:
        try:
            self.store.delete(project)
        except OSError as e:
            raise FatalIO(f"Cannot clear history for {project}: {e}") from e


def new_entry(operation: str, files: int, success: bool, **fields: Any) -> HistoryEntry:
    return HistoryEntry(id=str(uuid.uuid4()), operation=operation, files=files, success=success, extra=fields)
