"""Uniform descriptors for entries resolved through the overlay.

A descriptor pairs the overlay-relative *virtual* path with the physical
``real_path`` that supplied it.  Descriptors are built fresh on every call and
are immutable; splicing namespace or parent results into another node's view
goes through :meth:`FileInfo.relocated`, which returns a copy.
"""

from __future__ import annotations

import os
import posixpath
import stat
from collections.abc import Iterator
from dataclasses import dataclass, replace
from typing import IO, Any


def scan_dir(real_dir: str) -> list[tuple[os.DirEntry[str], os.stat_result]]:
    """Return the entries of *real_dir* sorted by name, with their stat results.

    Symlinks are followed for the stat; a dangling link is reported with its
    own ``lstat`` result.
    """
    with os.scandir(real_dir) as it:
        entries = sorted(it, key=lambda e: e.name)
    result: list[tuple[os.DirEntry[str], os.stat_result]] = []
    for entry in entries:
        try:
            st = entry.stat()
        except FileNotFoundError:
            st = entry.stat(follow_symlinks=False)
        result.append((entry, st))
    return result


@dataclass(frozen=True, slots=True)
class FileInfo:
    path: str
    real_path: str
    size: int
    mode: int
    mtime: float
    ctime: float

    @classmethod
    def from_stat(cls, path: str, real_path: str, st: os.stat_result) -> FileInfo:
        """Build the descriptor variant matching the kind recorded in *st*."""
        kind = DirFileInfo if stat.S_ISDIR(st.st_mode) else FileInfo
        return kind(
            path=path,
            real_path=real_path,
            size=st.st_size,
            mode=st.st_mode,
            mtime=st.st_mtime,
            ctime=st.st_ctime,
        )

    @property
    def name(self) -> str:
        return posixpath.basename(self.path) if self.path != "." else "."

    @property
    def is_dir(self) -> bool:
        return False

    def relocated(self, path: str) -> FileInfo:
        return replace(self, path=path)

    def stat(self) -> os.stat_result:
        return os.stat(self.real_path)

    def open(
        self,
        mode: str = "rb",
        encoding: str | None = None,
        errors: str | None = None,
    ) -> IO[Any]:
        if mode not in ("rb", "r"):
            raise ValueError(
                f"Invalid mode '{mode}'. Assets are read-only: {{'rb', 'r'}}"
            )
        if mode == "rb":
            return open(self.real_path, "rb")
        return open(self.real_path, "r", encoding=encoding or "utf-8", errors=errors)


@dataclass(frozen=True, slots=True)
class DirFileInfo(FileInfo):
    @property
    def is_dir(self) -> bool:
        return True

    def iter_dir(self) -> Iterator[FileInfo]:
        """Yield the direct children of this directory's physical location."""
        for entry, st in scan_dir(self.real_path):
            child = entry.name if self.path == "." else f"{self.path}/{entry.name}"
            yield FileInfo.from_stat(child, entry.path, st)

    def read_dir(self) -> list[FileInfo]:
        return list(self.iter_dir())

    def open(
        self,
        mode: str = "rb",
        encoding: str | None = None,
        errors: str | None = None,
    ) -> IO[Any]:
        raise IsADirectoryError(f"Is a directory: '{self.path}'")
