# src/fileops/core/tree.py
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Tuple

from fileops.config import DEFAULT_MAX_DEPTH
from fileops.core.classify import file_extension
from fileops.models import FileNode

logger = logging.getLogger(__name__)


def _iso_utc(timestamp: float) -> str:
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _sort_key(node: FileNode) -> Tuple[int, str]:
    # Directories first, then case-sensitive by name
    return (0 if node.is_dir else 1, node.name)


def _list_children(directory: Path, rel_prefix: str, depth: int, max_depth: int) -> Tuple[FileNode, ...]:
    if depth >= max_depth:
        return ()

    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as e:
        logger.warning("Cannot list %s: %s", directory, e)
        return ()

    nodes: List[FileNode] = []
    for entry in entries:
        rel_path = f"{rel_prefix}/{entry.name}" if rel_prefix else entry.name
        try:
            # Symlinked directories are not followed, so the walk cannot cycle
            is_dir = entry.is_dir(follow_symlinks=False)
            if is_dir:
                children = _list_children(Path(entry.path), rel_path, depth + 1, max_depth)
                nodes.append(
                    FileNode(
                        name=entry.name,
                        path=rel_path,
                        type="directory",
                        size=sum(child.size for child in children),
                        children=children,
                    )
                )
            else:
                stat = entry.stat()
                nodes.append(
                    FileNode(
                        name=entry.name,
                        path=rel_path,
                        type="file",
                        size=stat.st_size,
                        modified_at=_iso_utc(stat.st_mtime),
                        extension=file_extension(entry.name),
                    )
                )
        except OSError as e:
            # Broken symlink or permission error: leave the entry out
            logger.warning("Skipping %s: %s", rel_path, e)

    nodes.sort(key=_sort_key)
    return tuple(nodes)


def build_tree(root_dir: Path, max_depth: int = DEFAULT_MAX_DEPTH) -> FileNode:
    """
    Snapshot of root_dir as a FileNode tree, at most max_depth levels deep.
    Best-effort: unreadable subtrees become empty, nothing is raised.
    """
    children = _list_children(root_dir, "", 0, max_depth)
    return FileNode(
        name=root_dir.name,
        path="",
        type="directory",
        size=sum(child.size for child in children),
        children=children,
    )


def generate_project_tree(root: FileNode) -> str:
    """Generates a string representation of the project tree."""
    lines = [f"{root.name}/"]

    def _generate_lines_recursive(nodes: Tuple[FileNode, ...], prefix: str):
        for i, node in enumerate(nodes):
            is_last = (i == len(nodes) - 1)
            connector = "└── " if is_last else "├── "
            label = f"{node.name}/" if node.is_dir else node.name
            lines.append(f"{prefix}{connector}{label}")

            if node.children:
                new_prefix = prefix + ("    " if is_last else "│   ")
                _generate_lines_recursive(node.children, new_prefix)

    _generate_lines_recursive(root.children or (), "")
    return "\n".join(lines) + "\n"
