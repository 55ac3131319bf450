# src/fileops/core/paths.py
from pathlib import Path
from typing import Union

from fileops.config import PROJECTS_DIR_NAME


class PathResolver:
    """Maps a project name to its root directory under the data root.

    This is a plain join: existence is checked by the operation that uses
    the path, which reports ProjectNotFound itself.
    """

    def __init__(self, data_root: Path):
        self.projects_root = Path(data_root) / PROJECTS_DIR_NAME

    def resolve(self, project_name: str) -> Path:
        return self.projects_root / project_name


def resolve_within_root(root: Path, rel_path: Union[str, Path]) -> Path:
    """
    Resolve a project-relative path and guarantee it stays under root.
    Rejects absolute paths, '..' components and symlink escapes with ValueError.
    """
    rel = Path(rel_path)
    if rel.is_absolute():
        raise ValueError(f"Absolute paths are not allowed: {rel_path}")
    if any(part == ".." for part in rel.parts):
        raise ValueError(f"Path traversal '..' is not allowed: {rel_path}")

    resolved_root = root.resolve()
    candidate = resolved_root / rel
    try:
        candidate.resolve().relative_to(resolved_root)
    except ValueError:
        raise ValueError(f"Path escapes the project root: {rel_path}") from None
    # Return the unresolved candidate so symlinks themselves can be renamed/deleted
    return candidate
