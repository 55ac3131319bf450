# src/fileops/models.py
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class FileNode:
    """Immutable snapshot of one file or directory in a project tree."""
    name: str
    path: str
    type: str
    size: int = 0
    modified_at: Optional[str] = None
    extension: Optional[str] = None
    children: Optional[Tuple["FileNode", ...]] = None

    @property
    def is_dir(self) -> bool:
        return self.type == "directory"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "path": self.path, "type": self.type, "size": self.size}
        if self.is_dir:
            data["children"] = [child.to_dict() for child in self.children or ()]
        else:
            data["modifiedAt"] = self.modified_at
            data["extension"] = self.extension
        return data


@dataclass(frozen=True)
class PreviewLine:
    line: int
    text: str
    occurrences: int

    def to_dict(self) -> Dict[str, Any]:
        return {"line": self.line, "text": self.text, "occurrencesOnLine": self.occurrences}


@dataclass(frozen=True)
class SearchMatch:
    """One file's hits for a content search."""
    file: str
    match_count: int
    preview: Tuple[PreviewLine, ...]
    category: str
    size: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "matchCount": self.match_count,
            "preview": [p.to_dict() for p in self.preview],
            "category": self.category,
            "size": self.size,
        }


@dataclass(frozen=True)
class SearchReport:
    query: str
    results: Tuple[SearchMatch, ...]
    total_files: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "results": [r.to_dict() for r in self.results],
            "totalFiles": self.total_files,
        }


@dataclass(frozen=True)
class FileOutcome:
    """Result of one per-file action inside a batch: ok, or an error message."""
    file: str
    error: Optional[str] = None
    value: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, file: str, value: int = 0) -> "FileOutcome":
        return cls(file=file, value=value)

    @classmethod
    def failure(cls, file: str, error: str) -> "FileOutcome":
        return cls(file=file, error=error)


@dataclass(frozen=True)
class FileError:
    file: str
    error: str

    def to_dict(self) -> Dict[str, str]:
        return {"file": self.file, "error": self.error}


@dataclass(frozen=True)
class ReplaceReport:
    total_replacements: int
    files_modified: int
    errors: Tuple[FileError, ...] = ()
    error_count: int = 0

    @property
    def message(self) -> str:
        return f"Replaced {self.total_replacements} occurrences in {self.files_modified} files"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalReplacements": self.total_replacements,
            "filesModified": self.files_modified,
            "errorCount": self.error_count,
            "errors": [e.to_dict() for e in self.errors],
            "message": self.message,
        }


@dataclass(frozen=True)
class BulkActionResult:
    operation: str
    success_count: int
    error_count: int
    errors: Tuple[FileError, ...] = ()

    @property
    def message(self) -> str:
        return f"{self.operation} completed: {self.success_count} succeeded, {self.error_count} failed"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "successCount": self.success_count,
            "errorCount": self.error_count,
            "errors": [e.to_dict() for e in self.errors],
            "message": self.message,
        }


@dataclass(frozen=True)
class DiffRecord:
    line: int
    type: str
    left: str
    right: str

    def to_dict(self) -> Dict[str, Any]:
        return {"line": self.line, "type": self.type, "left": self.left, "right": self.right}


@dataclass(frozen=True)
class DiffStats:
    total_lines: int
    changed_lines: int
    left_size: int
    right_size: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalLines": self.total_lines,
            "changedLines": self.changed_lines,
            "leftSize": self.left_size,
            "rightSize": self.right_size,
        }


@dataclass(frozen=True)
class DiffReport:
    left_file: str
    right_file: str
    changes: Tuple[DiffRecord, ...]
    stats: DiffStats

    def to_dict(self) -> Dict[str, Any]:
        return {
            "leftFile": self.left_file,
            "rightFile": self.right_file,
            "changes": [c.to_dict() for c in self.changes],
            "stats": self.stats.to_dict(),
        }


@dataclass(frozen=True)
class HistoryEntry:
    """A journaled mutating operation; extra holds operation-specific fields."""
    id: str
    operation: str
    files: int
    success: bool
    timestamp: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = dict(self.extra)
        data.update(
            {
                "id": self.id,
                "operation": self.operation,
                "files": self.files,
                "success": self.success,
                "timestamp": self.timestamp,
            }
        )
        return data


@dataclass(frozen=True)
class RefactorReport:
    type: str
    processed_files: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "processedFiles": self.processed_files,
            "message": f"Refactoring completed: {self.processed_files} files processed",
        }


@dataclass(frozen=True)
class CandidateFile:
    """A file selected by a project walk, before its content is read."""
    path: Path
    rel_path: str
