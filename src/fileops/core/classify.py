# src/fileops/core/classify.py
from typing import Dict, FrozenSet, Iterable, Set

from fileops.config import FILE_TYPES, OTHER_CATEGORY

TEXT_EXTENSIONS: FrozenSet[str] = FILE_TYPES["text"]
CODE_EXTENSIONS: FrozenSet[str] = FILE_TYPES["code"]


def _build_category_index() -> Dict[str, str]:
    index: Dict[str, str] = {}
    for category, extensions in FILE_TYPES.items():
        for ext in extensions:
            # First category in table order wins (json -> text, not config)
            index.setdefault(ext, category)
    return index


_CATEGORY_BY_EXTENSION = _build_category_index()


def file_extension(name: str) -> str:
    """Substring after the last '.', lowercased; '' when there is none."""
    _, dot, ext = name.rpartition(".")
    return ext.lower() if dot else ""


def classify(name: str) -> str:
    return _CATEGORY_BY_EXTENSION.get(file_extension(name), OTHER_CATEGORY)


def is_text_file(name: str) -> bool:
    return file_extension(name) in TEXT_EXTENSIONS


def is_code_file(name: str) -> bool:
    return file_extension(name) in CODE_EXTENSIONS


def is_probably_binary(name: str) -> bool:
    """Unclassified and not a known text extension: never opened by search."""
    return classify(name) == OTHER_CATEGORY and not is_text_file(name)


def expand_categories(categories: Iterable[str]) -> Set[str]:
    """Union of the extension sets of the named categories; unknown names are ignored."""
    extensions: Set[str] = set()
    for category in categories:
        extensions.update(FILE_TYPES.get(category.strip().lower(), ()))
    return extensions
