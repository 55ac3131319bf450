# src/fileops/config.py
import os
from types import MappingProxyType
from pathlib import Path

# Environment variable that relocates the data root (projects + history)
HOME_ENV_VAR = "FILEOPS_HOME"
DEFAULT_HOME = Path.home() / ".fileops"

PROJECTS_DIR_NAME = "projects"
HISTORY_DIR_NAME = "file-operations"
HISTORY_FILE_SUFFIX = "-history.json"

DEFAULT_MAX_DEPTH = 5
SEARCH_RESULT_LIMIT = 100
PREVIEW_LINE_LIMIT = 5
ERROR_REPORT_LIMIT = 10
HISTORY_LIMIT = 100
HISTORY_VIEW_LIMIT = 50

# Bulk copy/move destinations, relative to the project root
COPIES_DIR_NAME = "copies"
MOVED_DIR_NAME = "moved"

# "Exclude gitignore" is this fixed denylist, not a parsed .gitignore
DEFAULT_IGNORE_PATTERNS = [
    "# Build, dependency and version-control trees",
    ".git/",
    "node_modules/",
    "dist/",
    "build/",
]

# Ordered: classification picks the first category that lists an extension
FILE_TYPES = MappingProxyType({
    "text": frozenset({"txt", "md", "json", "js", "jsx", "ts", "tsx", "css", "scss", "html", "xml", "yml", "yaml"}),
    "code": frozenset({"js", "jsx", "ts", "tsx", "py", "java", "c", "cpp", "cs", "php", "rb", "go", "rs"}),
    "config": frozenset({"json", "yml", "yaml", "toml", "ini", "conf", "config"}),
    "docs": frozenset({"md", "txt", "doc", "docx", "pdf"}),
    "images": frozenset({"jpg", "jpeg", "png", "gif", "svg", "webp", "bmp"}),
    "archives": frozenset({"zip", "tar", "gz", "rar", "7z"}),
})

OTHER_CATEGORY = "other"


def default_home() -> Path:
    """Data root, honouring FILEOPS_HOME when it is set."""
    override = os.environ.get(HOME_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return DEFAULT_HOME
