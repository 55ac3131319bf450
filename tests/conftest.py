# tests/conftest.py
import pytest

from fileops.engine import FileOperationsEngine


def _write_files(root, files):
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def write_files():
    """Writes {relative path: str | bytes} under a root directory."""
    return _write_files


@pytest.fixture
def home(tmp_path):
    return tmp_path / "home"


@pytest.fixture
def make_project(home):
    """Creates <home>/projects/<name> populated with the given files."""
    def _make(name="demo", files=None):
        root = home / "projects" / name
        root.mkdir(parents=True)
        return _write_files(root, files or {})
    return _make


@pytest.fixture
def engine(home):
    return FileOperationsEngine.from_home(home)
