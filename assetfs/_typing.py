from collections.abc import Callable
from typing import TYPE_CHECKING, TypedDict

if TYPE_CHECKING:
    from ._fs import AssetFileSystem
    from ._info import FileInfo


class AssetStats(TypedDict):
    root_count: int
    namespace_count: int
    parent_depth: int
    path: str


WalkCallback = Callable[["FileInfo"], None]
PathRegisterCallback = Callable[["AssetFileSystem", str], None]
IgnoreFunc = Callable[[str], bool]
