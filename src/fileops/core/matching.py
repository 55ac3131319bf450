# src/fileops/core/matching.py
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Pattern

from fileops.errors import InvalidArgument


@dataclass(frozen=True)
class MatchOptions:
    regex: bool = False
    case_sensitive: bool = False
    whole_word: bool = False
    exclude_gitignore: bool = False
    include_hidden: bool = False

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> "MatchOptions":
        """Accepts the camelCase keys callers send as well as snake_case ones."""
        options = options or {}

        def flag(camel: str, snake: str) -> bool:
            return bool(options.get(camel, options.get(snake, False)))

        return cls(
            regex=flag("regex", "regex"),
            case_sensitive=flag("caseSensitive", "case_sensitive"),
            whole_word=flag("wholeWord", "whole_word"),
            exclude_gitignore=flag("excludeGitignore", "exclude_gitignore"),
            include_hidden=flag("includeHidden", "include_hidden"),
        )


def require_query(query: Optional[str], what: str = "Search query") -> str:
    if query is None or not query.strip():
        raise InvalidArgument(f"{what} is required")
    return query


def compile_pattern(query: str, options: MatchOptions) -> Pattern[str]:
    """
    One compiled pattern per invocation.
    Literal queries are escaped; whole-word wraps the expression in \\b anchors.
    """
    source = query if options.regex else re.escape(query)
    if options.whole_word:
        source = rf"\b(?:{source})\b"
    flags = 0 if options.case_sensitive else re.IGNORECASE
    try:
        return re.compile(source, flags)
    except re.error as e:
        raise InvalidArgument(f"Invalid regular expression {query!r}: {e}") from e


def count_matches(pattern: Pattern[str], text: str) -> int:
    return sum(1 for _ in pattern.finditer(text))
