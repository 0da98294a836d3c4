from unittest.mock import patch

import pytest
from assetfs import WALK_ALL, WALK_DIRS, WALK_FILES, AssetFileSystem, StopWalk, WalkMode


@pytest.fixture
def fs(make_root):
    a = make_root("a", {"a.txt": "A", "sub/b.txt": "B"})
    b = make_root("b", {"a.txt": "A2", "c.txt": "C"})
    return AssetFileSystem([a, b])


def _paths(fs, dir=".", mode=WALK_ALL):
    return [info.path for info in fs.iter_walk(dir, mode)]


def test_walk_all_root_order(fs):
    assert _paths(fs) == ["a.txt", "sub", "sub/b.txt", "a.txt", "c.txt"]


def test_walk_is_not_deduplicated(fs):
    assert _paths(fs, mode=WALK_FILES).count("a.txt") == 2


def test_walk_files_only(fs):
    assert _paths(fs, mode=WALK_FILES) == ["a.txt", "sub/b.txt", "a.txt", "c.txt"]


def test_walk_dirs_only(fs):
    assert _paths(fs, mode=WALK_DIRS) == ["sub"]


def test_walk_reverse(fs):
    assert _paths(fs, mode=WALK_FILES.with_(reverse=True)) == [
        "a.txt", "c.txt", "a.txt", "sub/b.txt",
    ]


def test_walk_subdirectory_keeps_virtual_prefix(fs):
    assert _paths(fs, "sub") == ["sub/b.txt"]


def test_walk_real_paths_point_at_supplying_root(fs):
    a, b = fs.roots
    real = [info.real_path for info in fs.iter_walk(".", WALK_FILES)]
    assert real[0].startswith(a)
    assert real[-1].startswith(b)


def test_walk_missing_directory_is_empty(fs):
    assert _paths(fs, "nope") == []


def test_walk_skips_missing_root(fs, tmp_path):
    fs.register_path(tmp_path / "gone", ignore_exists=True)
    assert _paths(fs, mode=WALK_FILES) == ["a.txt", "sub/b.txt", "a.txt", "c.txt"]


def test_walk_neither_files_nor_dirs_reports_nothing(fs):
    assert _paths(fs, mode=WalkMode(files=False, dirs=False)) == []


def test_walk_callback(fs):
    seen = []
    fs.walk(".", seen.append, WALK_FILES)
    assert [i.path for i in seen] == ["a.txt", "sub/b.txt", "a.txt", "c.txt"]


def test_walk_stop_early(fs):
    seen = []

    def cb(info):
        seen.append(info.path)
        raise StopWalk

    fs.walk(".", cb)
    assert seen == ["a.txt"]


def test_walk_callback_error_propagates(fs):
    seen = []

    def cb(info):
        seen.append(info.path)
        if len(seen) == 2:
            raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        fs.walk(".", cb)
    assert seen == ["a.txt", "sub"]


def test_walk_io_error_aborts(fs):
    with patch("assetfs._fs.scan_dir", side_effect=PermissionError("denied")):
        with pytest.raises(PermissionError):
            list(fs.iter_walk("."))


def test_walk_is_idempotent(fs):
    assert _paths(fs) == _paths(fs)
