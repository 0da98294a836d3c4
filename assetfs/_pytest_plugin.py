"""pytest fixture plugin.

Usage::

    # conftest.py
    pytest_plugins = ["assetfs._pytest_plugin"]

This makes the ``afs`` fixture automatically available::

    def test_something(afs):
        (Path(afs.roots[0]) / "a.txt").write_text("hello")
        assert afs.is_file("a.txt")
"""

import pytest

from ._fs import AssetFileSystem


@pytest.fixture
def afs(tmp_path) -> AssetFileSystem:
    """An :class:`AssetFileSystem` with a single empty root under ``tmp_path``.

    Provides an independent instance per test (function scope).
    """
    root = tmp_path / "assets"
    root.mkdir()
    return AssetFileSystem([root])
