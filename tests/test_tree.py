# tests/test_tree.py
import os

from fileops.core.tree import build_tree, generate_project_tree


def _walk(node):
    yield node
    for child in node.children or ():
        yield from _walk(child)


def _depth(node):
    return node.path.count("/") + 1 if node.path else 0


# --- Test 1: Ordering and metadata ---

def test_directories_first_then_case_sensitive_names(tmp_path, write_files):
    write_files(tmp_path, {"b.txt": "b", "A.txt": "a", "zdir/x.txt": "x", "Adir/y.txt": "y"})

    tree = build_tree(tmp_path)

    assert [c.name for c in tree.children] == ["Adir", "zdir", "A.txt", "b.txt"]
    assert [c.type for c in tree.children] == ["directory", "directory", "file", "file"]


def test_file_metadata(tmp_path, write_files):
    write_files(tmp_path, {"README.MD": "hello", "Makefile": "all:", "pkg/archive.tar.gz": b"\x00\x01"})

    tree = build_tree(tmp_path)
    by_path = {n.path: n for n in _walk(tree)}

    readme = by_path["README.MD"]
    assert readme.extension == "md"
    assert readme.size == 5
    assert readme.modified_at.endswith("Z")
    assert by_path["Makefile"].extension == ""
    assert by_path["pkg/archive.tar.gz"].extension == "gz"


def test_directory_size_is_sum_of_children(tmp_path, write_files):
    write_files(tmp_path, {"d/a.txt": "12345", "d/e/b.txt": "123"})

    tree = build_tree(tmp_path)
    d = tree.children[0]

    assert d.size == 8
    assert tree.size == 8


def test_paths_are_relative_descendants(tmp_path, write_files):
    write_files(tmp_path, {"a/b/c.txt": "c", "a/d.txt": "d"})

    for node in _walk(build_tree(tmp_path)):
        if node.path:
            assert not os.path.isabs(node.path)
            assert (tmp_path / node.path).exists()
            assert ".." not in node.path.split("/")


# --- Test 2: Depth bound ---

def test_max_depth_omits_deeper_nodes(tmp_path, write_files):
    write_files(tmp_path, {"a/b/c/d/deep.txt": "x"})

    tree = build_tree(tmp_path, max_depth=2)
    paths = [n.path for n in _walk(tree)]

    assert paths == ["", "a", "a/b"]
    # The boundary directory is kept, with no children
    b = tree.children[0].children[0]
    assert b.type == "directory"
    assert b.children == ()
    assert max(_depth(n) for n in _walk(tree)) <= 2


def test_max_depth_zero_lists_nothing(tmp_path, write_files):
    write_files(tmp_path, {"a.txt": "x"})

    assert build_tree(tmp_path, max_depth=0).children == ()


# --- Test 3: Best effort ---

def test_broken_symlink_does_not_fail_the_build(tmp_path, write_files):
    write_files(tmp_path, {"ok.txt": "fine"})
    os.symlink(tmp_path / "nowhere", tmp_path / "dangling")

    tree = build_tree(tmp_path)

    assert [c.name for c in tree.children] == ["ok.txt"]


def test_missing_root_gives_empty_tree(tmp_path):
    tree = build_tree(tmp_path / "absent")
    assert tree.children == ()


def test_to_dict_shape(tmp_path, write_files):
    write_files(tmp_path, {"src/main.py": "print(1)"})

    data = build_tree(tmp_path).to_dict()
    src = data["children"][0]
    main = src["children"][0]

    assert src["type"] == "directory" and "modifiedAt" not in src
    assert main == {
        "name": "main.py",
        "path": "src/main.py",
        "type": "file",
        "size": 8,
        "modifiedAt": main["modifiedAt"],
        "extension": "py",
    }


# --- Test 4: Text rendering ---

def test_tree_generation(tmp_path, write_files):
    write_files(tmp_path, {"src/main.py": "", "src/utils/helper.py": "", "README.md": ""})

    tree_str = generate_project_tree(build_tree(tmp_path))

    assert tree_str.startswith(f"{tmp_path.name}/\n")
    assert "├── src/" in tree_str
    assert "│   ├── utils/" in tree_str
    assert "└── README.md" in tree_str
