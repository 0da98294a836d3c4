import os

import pytest
from assetfs import (
    WALK_FILES,
    AssetFileSystem,
    InvalidNameSpaceError,
    NameSpaceNotFoundError,
)


@pytest.fixture
def fs(make_root):
    top = make_root("top", {"app.js": "app"})
    vendor = make_root("vendor", {"lib.js": "lib", "css/x.css": "x"})
    fs = AssetFileSystem([top])
    fs.namespace("vendor").register_path(vendor)
    return fs


def _paths(fs, dir=".", mode=WALK_FILES):
    return [info.path for info in fs.iter_walk(dir, mode)]


def test_namespace_visible_through_walk(fs):
    assert _paths(fs) == ["vendor/css/x.css", "vendor/lib.js", "app.js"]


def test_namespace_hidden_without_lookup(fs):
    assert _paths(fs, mode=WALK_FILES.with_(namespaces=False)) == ["app.js"]


def test_walk_into_namespace_directory(fs):
    assert _paths(fs, "vendor") == ["vendor/css/x.css", "vendor/lib.js"]
    assert _paths(fs, "vendor/css") == ["vendor/css/x.css"]


def test_resolve_through_namespace(fs):
    info = fs.asset_info("vendor/lib.js")
    assert info.path == "vendor/lib.js"
    assert info.real_path == os.path.join(fs.get_namespace("vendor").roots[0], "lib.js")


def test_resolve_namespace_name_as_directory(fs):
    assert fs.is_dir("vendor")


def test_resolve_without_namespace_lookup(fs):
    with pytest.raises(FileNotFoundError):
        fs.asset_info("vendor/lib.js", namespaces=False)


def test_namespace_paths_are_relative_to_itself(fs):
    ns = fs.get_namespace("vendor")
    assert ns.asset_info("lib.js").path == "lib.js"
    assert _paths(ns, mode=WALK_FILES.with_(parent=False)) == ["css/x.css", "lib.js"]


def test_nested_namespaces(fs, make_root):
    inner = make_root("inner", {"f.txt": "f"})
    fs.namespace("a").namespace("b").register_path(inner)
    assert fs.namespace("a").namespace("b").path == "a/b"
    assert "a/b/f.txt" in _paths(fs)
    assert fs.asset_info("a/b/f.txt").real_path == os.path.join(inner, "f.txt")


def test_namespace_get_or_create(fs):
    assert fs.namespace("vendor") is fs.get_namespace("vendor")
    assert fs.namespace("vendor").parent is fs
    assert fs.namespace("vendor").name == "vendor"
    assert [ns.name for ns in fs.namespaces()] == ["vendor"]


def test_namespace_inherits_search_order():
    fs = AssetFileSystem(search_order="reverse")
    assert fs.namespace("x").search_order == "reverse"


def test_get_unknown_namespace(fs):
    with pytest.raises(NameSpaceNotFoundError):
        fs.get_namespace("nope")


@pytest.mark.parametrize("name", ["", ".", "..", "a/b", "a\\b"])
def test_invalid_namespace_names(fs, name):
    with pytest.raises(InvalidNameSpaceError):
        fs.namespace(name)


def test_namespace_requires_parent():
    with pytest.raises(ValueError, match="requires a parent"):
        AssetFileSystem(name="orphan")
