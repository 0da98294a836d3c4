from __future__ import annotations

import fnmatch
from dataclasses import dataclass

from ._path import normalize_path

_WILDCARDS = frozenset("*?[")


@dataclass(frozen=True, slots=True)
class GlobPattern:
    """A parsed glob request: a virtual directory plus a base-name pattern.

    Wildcards (``*``, ``?``, ``[seq]``) apply to the base name only.  When
    ``recursive`` is set, the whole sub-tree below ``dir`` is searched.
    """

    dir: str = "."
    name: str = "*"
    allow_files: bool = True
    allow_dirs: bool = False
    recursive: bool = False

    def match(self, name: str) -> bool:
        return fnmatch.fnmatchcase(name, self.name)

    @classmethod
    def parse(
        cls,
        pattern: str,
        allow_files: bool | None = None,
        allow_dirs: bool | None = None,
    ) -> GlobPattern:
        """Parse ``"dir/**/name"`` style strings.

        * ``**`` directly before the base name makes the pattern recursive.
        * A trailing ``/`` selects directories only.
        * An empty base name (``"dir/"``, ``"**"``) matches everything.
        """
        converted = pattern.replace("\\", "/")
        dirs_only = converted.endswith("/")
        parts = [p for p in converted.split("/") if p]

        name = "*"
        if parts and parts[-1] != "**":
            name = parts.pop()
        recursive = False
        if parts and parts[-1] == "**":
            recursive = True
            parts.pop()
        for part in parts:
            if part == "**" or _WILDCARDS.intersection(part):
                raise ValueError(
                    f"Wildcards are only supported in the base name: '{pattern}'"
                )

        if allow_files is None:
            allow_files = not dirs_only
        if allow_dirs is None:
            allow_dirs = dirs_only
        return cls(
            dir=normalize_path("/".join(parts)),
            name=name,
            allow_files=allow_files,
            allow_dirs=allow_dirs,
            recursive=recursive,
        )
