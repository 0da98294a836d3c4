from ._asset import Asset
from ._exceptions import (
    AssetNotFoundError,
    InvalidNameSpaceError,
    NameSpaceNotFoundError,
    ResolveCancelledError,
    StopWalk,
)
from ._fs import AssetFileSystem
from ._info import DirFileInfo, FileInfo
from ._mode import WALK_ALL, WALK_DIRS, WALK_FILES, WalkMode
from ._pattern import GlobPattern
from ._typing import AssetStats

__all__ = [
    "AssetFileSystem",
    "Asset",
    "FileInfo",
    "DirFileInfo",
    "GlobPattern",
    "WalkMode",
    "WALK_ALL",
    "WALK_FILES",
    "WALK_DIRS",
    "AssetNotFoundError",
    "NameSpaceNotFoundError",
    "InvalidNameSpaceError",
    "ResolveCancelledError",
    "StopWalk",
    "AssetStats",
]
__version__ = "0.1.0"
