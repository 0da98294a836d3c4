from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class WalkMode:
    """Flags controlling a walk over the overlay.

    ``files``/``dirs`` select what is reported, ``reverse`` flips the root
    order, ``namespaces`` descends into registered namespaces and ``parent``
    continues into the enclosing node.  Requesting neither files nor dirs is
    allowed and reports nothing.
    """

    files: bool = True
    dirs: bool = True
    reverse: bool = False
    namespaces: bool = True
    parent: bool = True

    def with_(self, **changes: bool) -> WalkMode:
        return replace(self, **changes)

    @property
    def is_empty(self) -> bool:
        return not (self.files or self.dirs)


WALK_ALL = WalkMode()
WALK_FILES = WalkMode(dirs=False)
WALK_DIRS = WalkMode(files=False)
