import pytest
from assetfs import AssetFileSystem

from tests.helpers.trees import build_tree


@pytest.fixture
def afs(tmp_path) -> AssetFileSystem:
    """デフォルトの afs フィクスチャ（空のルート 1 つ）。"""
    root = tmp_path / "assets"
    root.mkdir()
    return AssetFileSystem([root])


@pytest.fixture
def make_root(tmp_path):
    """Create a physical root populated from a ``{relpath: content}`` mapping."""
    def _make(name: str, files: dict[str, bytes | str | None] | None = None) -> str:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        build_tree(root, files or {})
        return str(root)
    return _make
