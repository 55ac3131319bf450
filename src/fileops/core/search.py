# src/fileops/core/search.py
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Pattern

from fileops.config import PREVIEW_LINE_LIMIT, SEARCH_RESULT_LIMIT
from fileops.core.classify import classify, expand_categories, is_probably_binary
from fileops.core.ignore import CandidateFilter, build_include_spec, load_ignore_spec
from fileops.core.matching import MatchOptions, compile_pattern, count_matches, require_query
from fileops.core.scanner import ProjectScanner, looks_binary
from fileops.models import CandidateFile, PreviewLine, SearchMatch, SearchReport

logger = logging.getLogger(__name__)


def candidate_filter_for(
    options: MatchOptions,
    file_types: Optional[Iterable[str]] = None,
    extensions: Optional[Iterable[str]] = None,
) -> CandidateFilter:
    """Explicit extensions win over type categories; neither means every file."""
    wanted = [e for e in extensions or () if e and e.strip()]
    if not wanted and file_types:
        wanted = sorted(expand_categories(file_types))
    return CandidateFilter(
        ignore_spec=load_ignore_spec() if options.exclude_gitignore else None,
        include_spec=build_include_spec(wanted),
        include_hidden=options.include_hidden,
    )


def _scan_file(candidate: CandidateFile, pattern: Pattern[str]) -> Optional[SearchMatch]:
    if looks_binary(candidate.path):
        return None
    size = candidate.path.stat().st_size
    with open(candidate.path, "r", encoding="utf-8", newline="") as f:
        content = f.read()

    total = 0
    preview: List[PreviewLine] = []
    for index, line in enumerate(content.split("\n")):
        hits = count_matches(pattern, line)
        if not hits:
            continue
        total += hits
        if len(preview) < PREVIEW_LINE_LIMIT:
            preview.append(PreviewLine(line=index + 1, text=line.strip(), occurrences=hits))

    if not total:
        return None
    return SearchMatch(
        file=candidate.rel_path,
        match_count=total,
        preview=tuple(preview),
        category=classify(candidate.rel_path),
        size=size,
    )


def search_project(
    root_dir: Path,
    query: str,
    options: Optional[MatchOptions] = None,
    file_types: Optional[Iterable[str]] = None,
    extensions: Optional[Iterable[str]] = None,
) -> SearchReport:
    """
    Scans every candidate file line by line for query.
    Results are ordered by match count (ties keep walk order) and capped;
    total_files counts every matching file.
    """
    require_query(query)
    options = options or MatchOptions()
    pattern = compile_pattern(query, options)

    scanner = ProjectScanner(root_dir, candidate_filter_for(options, file_types, extensions))
    matches: List[SearchMatch] = []
    for candidate in scanner.scan():
        if is_probably_binary(candidate.rel_path):
            continue
        try:
            match = _scan_file(candidate, pattern)
        except UnicodeDecodeError:
            logger.debug("Skipping %s (not utf-8 text)", candidate.rel_path)
            continue
        except OSError as e:
            logger.warning("Skipping %s (read error: %s)", candidate.rel_path, e)
            continue
        if match is not None:
            matches.append(match)

    matches.sort(key=lambda m: m.match_count, reverse=True)
    logger.info("Search %r matched %d files under %s", query, len(matches), root_dir)
    return SearchReport(query=query, results=tuple(matches[:SEARCH_RESULT_LIMIT]), total_files=len(matches))
