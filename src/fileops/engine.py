# src/fileops/engine.py
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from fileops.config import DEFAULT_MAX_DEPTH, FILE_TYPES, HISTORY_DIR_NAME, HISTORY_VIEW_LIMIT, default_home
from fileops.core.bulk import BulkOperation, BulkOperationExecutor
from fileops.core.diff import diff_files
from fileops.core.history import OperationHistoryLog, new_entry
from fileops.core.matching import MatchOptions
from fileops.core.paths import PathResolver, resolve_within_root
from fileops.core.refactor import run_refactor
from fileops.core.replace import replace_across_files
from fileops.core.search import search_project
from fileops.core.tree import build_tree
from fileops.errors import InvalidArgument, ProjectNotFound
from fileops.models import BulkActionResult, DiffReport, FileNode, RefactorReport, ReplaceReport, SearchReport

logger = logging.getLogger(__name__)


class FileOperationsEngine:
    """
    The project-facing operations. Every call resolves the project root
    explicitly and threads it through; nothing touches the process cwd.
    """

    def __init__(self, resolver: PathResolver, history: OperationHistoryLog):
        self.resolver = resolver
        self.history = history

    @classmethod
    def from_home(cls, home: Optional[Path] = None) -> "FileOperationsEngine":
        home = Path(home) if home is not None else default_home()
        return cls(PathResolver(home), OperationHistoryLog.in_directory(home / HISTORY_DIR_NAME))

    def project_root(self, project: str) -> Path:
        if not project:
            raise InvalidArgument("Project name is required")
        root = self.resolver.resolve(project)
        if not root.is_dir():
            raise ProjectNotFound(project)
        return root

    def _target(self, root: Path, rel_path: Optional[str]) -> Path:
        if not rel_path:
            raise InvalidArgument("Both files are required for comparison")
        try:
            return resolve_within_root(root, rel_path)
        except ValueError as e:
            raise InvalidArgument(str(e)) from e

    def get_tree(self, project: str, max_depth: int = DEFAULT_MAX_DEPTH) -> FileNode:
        if max_depth < 0:
            raise InvalidArgument(f"max_depth must be >= 0, got {max_depth}")
        root = self.project_root(project)
        logger.info("Loading file tree for project: %s", project)
        tree = build_tree(root, max_depth)
        # The root node is named after the project, not the directory on disk
        return FileNode(name=project, path="", type="directory", size=tree.size, children=tree.children)

    def search(
        self,
        project: str,
        query: str,
        options: Optional[Mapping[str, Any]] = None,
        file_types: Optional[Iterable[str]] = None,
        extensions: Optional[Iterable[str]] = None,
    ) -> SearchReport:
        match_options = MatchOptions.from_mapping(options)
        if not query or not query.strip():
            raise InvalidArgument("Search query is required")
        root = self.project_root(project)
        logger.info("Searching in project: %s, query: %r", project, query)
        return search_project(root, query, match_options, file_types, extensions)

    def replace(
        self,
        project: str,
        search_query: str,
        replace_query: Optional[str],
        options: Optional[Mapping[str, Any]] = None,
        replace_all: bool = False,
        files: Optional[Sequence[str]] = None,
    ) -> ReplaceReport:
        if not search_query or not search_query.strip() or replace_query is None:
            raise InvalidArgument("Search and replace queries are required")
        root = self.project_root(project)
        logger.info("Replacing in project: %s, %r -> %r", project, search_query, replace_query)
        report = replace_across_files(
            root, search_query, replace_query, MatchOptions.from_mapping(options), files=files, replace_all=replace_all
        )
        self.history.append(
            project,
            new_entry("replace", report.files_modified, True, details=f'"{search_query}" -> "{replace_query}"'),
        )
        return report

    def bulk(
        self,
        project: str,
        operation: str,
        files: Sequence[str],
        options: Optional[Mapping[str, Any]] = None,
    ) -> BulkActionResult:
        BulkOperation.parse(operation)
        if not files:
            raise InvalidArgument("Operation and files are required")
        root = self.project_root(project)
        logger.info("Bulk %s for project: %s, %d files", operation, project, len(files))
        result = BulkOperationExecutor(root).execute(operation, files, options)
        self.history.append(
            project,
            new_entry(result.operation, result.success_count, result.error_count == 0, errors=result.error_count),
        )
        return result

    def compare(self, project: str, left_file: str, right_file: str) -> DiffReport:
        root = self.project_root(project)
        left_path = self._target(root, left_file)
        right_path = self._target(root, right_file)
        logger.info("Comparing files in project: %s", project)
        changes, stats = diff_files(left_path, right_path)
        return DiffReport(left_file=left_file, right_file=right_file, changes=tuple(changes), stats=stats)

    def refactor(
        self,
        project: str,
        refactor_type: str,
        files: Sequence[str],
        old_name: Optional[str] = None,
        new_name: Optional[str] = None,
    ) -> RefactorReport:
        root = self.project_root(project)
        logger.info("Refactoring in project: %s, type: %s", project, refactor_type)
        report = run_refactor(root, refactor_type, files, old_name, new_name)
        self.history.append(project, new_entry(f"refactor-{refactor_type}", report.processed_files, True))
        return report

    def get_history(self, project: str, limit: int = HISTORY_VIEW_LIMIT) -> List[Dict[str, Any]]:
        return self.history.load(project)[:limit]

    def clear_history(self, project: str) -> None:
        self.history.clear(project)

    @staticmethod
    def supported_types() -> Dict[str, Any]:
        return {
            "fileTypes": {category: sorted(exts) for category, exts in FILE_TYPES.items()},
            "operationTypes": [op.value for op in BulkOperation],
        }
