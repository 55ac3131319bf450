# tests/test_engine.py
import pytest

from fileops.config import HOME_ENV_VAR
from fileops.engine import FileOperationsEngine
from fileops.errors import InvalidArgument, ProjectNotFound


# --- Test 1: Project resolution ---

def test_unknown_project_is_not_found(engine):
    with pytest.raises(ProjectNotFound):
        engine.get_tree("ghost")
    with pytest.raises(ProjectNotFound):
        engine.search("ghost", "foo")
    with pytest.raises(ProjectNotFound):
        engine.bulk("ghost", "delete", ["a.txt"])


def test_blank_query_checked_before_project(engine):
    with pytest.raises(InvalidArgument):
        engine.search("ghost", "  ")


def test_home_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv(HOME_ENV_VAR, str(tmp_path / "elsewhere"))
    (tmp_path / "elsewhere" / "projects" / "demo").mkdir(parents=True)

    assert FileOperationsEngine.from_home().get_tree("demo").name == "demo"


# --- Test 2: Operations ---

def test_tree_root_is_named_after_project(engine, make_project):
    make_project("demo", {"src/main.py": "print()"})

    tree = engine.get_tree("demo", max_depth=1)

    assert (tree.name, tree.path) == ("demo", "")
    assert tree.children[0].name == "src"
    assert tree.children[0].children == ()


def test_negative_depth_rejected(engine, make_project):
    make_project("demo")
    with pytest.raises(InvalidArgument):
        engine.get_tree("demo", max_depth=-1)


def test_search_accepts_camel_case_options(engine, make_project):
    make_project("demo", {"a.txt": "Foo foo", "node_modules/x.js": "foo"})

    report = engine.search("demo", "foo", {"caseSensitive": True, "excludeGitignore": True})

    assert [(m.file, m.match_count) for m in report.results] == [("a.txt", 1)]
    assert report.to_dict()["totalFiles"] == 1


def test_replace_journals_once_per_batch(engine, make_project):
    root = make_project("demo", {"a.txt": "foo foo", "b.txt": "foo"})

    report = engine.replace("demo", "foo", "bar", files=["a.txt", "b.txt"])

    assert report.to_dict()["message"] == "Replaced 3 occurrences in 2 files"
    assert (root / "a.txt").read_text() == "bar bar"
    history = engine.get_history("demo")
    assert len(history) == 1
    assert history[0]["operation"] == "replace"
    assert history[0]["files"] == 2
    assert history[0]["details"] == '"foo" -> "bar"'


def test_replace_requires_queries(engine, make_project):
    make_project("demo")
    with pytest.raises(InvalidArgument):
        engine.replace("demo", "", "bar", files=["a.txt"])


def test_bulk_journals_counts(engine, make_project):
    make_project("demo", {"x.txt": "x"})

    result = engine.bulk("demo", "delete", ["x.txt", "missing.txt"])

    assert (result.success_count, result.error_count) == (1, 1)
    entry = engine.get_history("demo")[0]
    assert entry["operation"] == "delete"
    assert entry["files"] == 1
    assert entry["errors"] == 1
    assert entry["success"] is False


def test_compare_within_project(engine, make_project):
    make_project("demo", {"l.txt": "a\nb\nc", "r.txt": "a\nx\nc"})

    report = engine.compare("demo", "l.txt", "r.txt").to_dict()

    assert report["leftFile"] == "l.txt"
    assert report["changes"] == [{"line": 2, "type": "modified", "left": "b", "right": "x"}]
    assert report["stats"]["changedLines"] == 1


def test_compare_rejects_escaping_paths(engine, make_project):
    make_project("demo", {"l.txt": "a"})
    with pytest.raises(InvalidArgument):
        engine.compare("demo", "l.txt", "../../etc/passwd")


def test_rename_symbol_only_touches_code_files(engine, make_project):
    root = make_project(
        "demo",
        {"app.py": "def foo():\n    return foo_bar + foo\n", "README.md": "call foo()"},
    )

    report = engine.refactor("demo", "rename-symbol", ["app.py", "README.md"], "foo", "baz")

    assert report.processed_files == 1
    assert (root / "app.py").read_text() == "def baz():\n    return foo_bar + baz\n"
    assert (root / "README.md").read_text() == "call foo()"
    assert engine.get_history("demo")[0]["operation"] == "refactor-rename-symbol"


def test_rename_symbol_is_case_sensitive(engine, make_project):
    root = make_project("demo", {"app.py": "Foo = foo\n"})

    engine.refactor("demo", "rename-symbol", ["app.py"], "foo", "bar")

    assert (root / "app.py").read_text() == "Foo = bar\n"


def test_unsupported_refactor(engine, make_project):
    make_project("demo")
    with pytest.raises(InvalidArgument):
        engine.refactor("demo", "extract-function", ["a.py"])


def test_history_view_is_limited(engine, make_project):
    make_project("demo", {"x.txt": "x"})
    for _ in range(55):
        engine.bulk("demo", "compress", ["x.txt"])

    assert len(engine.get_history("demo")) == 50
    engine.clear_history("demo")
    assert engine.get_history("demo") == []


def test_supported_types():
    types = FileOperationsEngine.supported_types()

    assert "py" in types["fileTypes"]["code"]
    assert types["operationTypes"] == ["copy", "move", "delete", "duplicate", "rename", "compress"]
