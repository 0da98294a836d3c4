"""Read access to the content behind a resolved descriptor."""

from __future__ import annotations

from typing import IO

from ._info import FileInfo


class Asset:
    """A resolved asset: its descriptor plus helpers to read its content.

    The filesystem never keeps assets open; every :meth:`reader` call opens
    a fresh stream that the caller must close.
    """

    __slots__ = ("_info",)

    def __init__(self, info: FileInfo) -> None:
        self._info = info

    def __repr__(self) -> str:
        return f"Asset(path={self._info.path!r}, real_path={self._info.real_path!r})"

    @property
    def info(self) -> FileInfo:
        return self._info

    @property
    def name(self) -> str:
        return self._info.name

    @property
    def path(self) -> str:
        return self._info.path

    @property
    def real_path(self) -> str:
        return self._info.real_path

    def reader(self) -> IO[bytes]:
        return self._info.open("rb")

    def data(self, max_size: int | None = None) -> bytes:
        """Read the whole content.

        Note: the file is re-read on every call; nothing is cached.
        """
        with self.reader() as f:
            if max_size is None:
                return f.read()
            data = f.read(max_size + 1)
        if len(data) > max_size:
            raise ValueError(f"Asset '{self.path}' exceeds max_size={max_size}.")
        return data

    def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        return self.data().decode(encoding, errors)
