# src/fileops/core/ignore.py
from pathlib import PurePosixPath
from typing import Iterable, Optional

import pathspec

from fileops.config import DEFAULT_IGNORE_PATTERNS


def load_ignore_spec() -> pathspec.PathSpec:
    """Creates a PathSpec from the built-in dependency/build/VCS denylist."""
    return pathspec.PathSpec.from_lines("gitwildmatch", DEFAULT_IGNORE_PATTERNS)


def build_include_spec(extensions: Optional[Iterable[str]]) -> Optional[pathspec.PathSpec]:
    """Turns ['py', '.md'] into '*.py', '*.md' patterns. None means every file is a candidate."""
    if not extensions:
        return None
    patterns = []
    for ext in extensions:
        ext = ext.strip().lstrip(".")
        if ext:
            patterns.append(f"*.{ext}")
    if not patterns:
        return None
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def is_hidden(rel_path: str) -> bool:
    return any(part.startswith(".") for part in PurePosixPath(rel_path).parts)


class CandidateFilter:
    """Decides which directories to prune and which files to keep during a walk."""

    def __init__(
        self,
        ignore_spec: Optional[pathspec.PathSpec] = None,
        include_spec: Optional[pathspec.PathSpec] = None,
        include_hidden: bool = True,
    ):
        self.ignore_spec = ignore_spec
        self.include_spec = include_spec
        self.include_hidden = include_hidden

    def prunes_dir(self, rel_dir: str) -> bool:
        if not self.include_hidden and is_hidden(rel_dir):
            return True
        # Trailing slash so directory-only patterns such as "build/" match
        return self.ignore_spec is not None and self.ignore_spec.match_file(rel_dir + "/")

    def accepts_file(self, rel_file: str) -> bool:
        if not self.include_hidden and is_hidden(rel_file):
            return False
        if self.ignore_spec is not None and self.ignore_spec.match_file(rel_file):
            return False
        if self.include_spec is not None and not self.include_spec.match_file(rel_file):
            return False
        return True
