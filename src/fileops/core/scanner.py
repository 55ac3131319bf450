# src/fileops/core/scanner.py
import logging
import os
from pathlib import Path
from typing import Iterator

from fileops.core.ignore import CandidateFilter
from fileops.models import CandidateFile

logger = logging.getLogger(__name__)


def looks_binary(path: Path) -> bool:
    """
    Reads the first 1024 bytes to check for null bytes.
    Returns True if likely binary, False if likely text.
    """
    with path.open("rb") as f:
        chunk = f.read(1024)
    return b"\0" in chunk


class ProjectScanner:
    def __init__(self, root_dir: Path, candidate_filter: CandidateFilter):
        self.root_dir = root_dir
        self.candidate_filter = candidate_filter

    def _on_walk_error(self, error: OSError) -> None:
        logger.warning("Skipping unreadable directory %s: %s", error.filename, error.strerror)

    def scan(self) -> Iterator[CandidateFile]:
        """
        Walks the directory tree in sorted order, pruning ignored directories,
        and yields every file the filter accepts. Content is not read here.
        """
        for root, dirs, files in os.walk(self.root_dir, onerror=self._on_walk_error):
            root_path = Path(root)

            # --- 1. Prune Directories (in-place, so os.walk never descends) ---
            kept = []
            for d in sorted(dirs):
                dir_rel_path = (root_path / d).relative_to(self.root_dir).as_posix()
                if self.candidate_filter.prunes_dir(dir_rel_path):
                    logger.debug("Pruning directory: %s", dir_rel_path)
                    continue
                kept.append(d)
            dirs[:] = kept

            # --- 2. Process Files ---
            for f in sorted(files):
                file_abs_path = root_path / f
                rel_path = file_abs_path.relative_to(self.root_dir).as_posix()
                if self.candidate_filter.accepts_file(rel_path):
                    yield CandidateFile(path=file_abs_path, rel_path=rel_path)
