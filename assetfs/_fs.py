from __future__ import annotations

import logging
import os
import threading
import weakref
from collections.abc import Iterable, Iterator
from typing import IO, Any

from ._asset import Asset
from ._exceptions import (
    AssetNotFoundError,
    InvalidNameSpaceError,
    NameSpaceNotFoundError,
    ResolveCancelledError,
    StopWalk,
)
from ._info import FileInfo, scan_dir
from ._mode import WALK_ALL, WalkMode
from ._path import join_path, normalize_path, split_first, strip_prefix
from ._pattern import GlobPattern
from ._typing import AssetStats, IgnoreFunc, PathRegisterCallback, WalkCallback

logger = logging.getLogger(__name__)

_SEARCH_ORDERS = ("forward", "reverse")


def _physical(root: str, vdir: str) -> str:
    if vdir == ".":
        return root
    return os.path.join(root, *vdir.split("/"))


def _walk_tree(
    top: str,
    prefix: str,
    mode: WalkMode,
    ancestors: frozenset[tuple[int, int]] | None = None,
) -> Iterator[FileInfo]:
    """Depth-first, pre-order walk of one physical directory.

    *top* itself is not reported.  Symlinked directories are followed; a
    directory already on the current descent path (a symlink cycle) is
    reported but not entered again.
    """
    if ancestors is None:
        st = os.stat(top)
        ancestors = frozenset({(st.st_dev, st.st_ino)})
    for entry, st in scan_dir(top):
        info = FileInfo.from_stat(join_path(prefix, entry.name), entry.path, st)
        if info.is_dir:
            if mode.dirs:
                yield info
            key = (st.st_dev, st.st_ino)
            if key in ancestors:
                logger.debug("symlink cycle at %s, not descending", entry.path)
                continue
            yield from _walk_tree(entry.path, info.path, mode, ancestors | {key})
        elif mode.files:
            yield info


# ---------------------------------------------------------------------------
#  AssetFileSystem
# ---------------------------------------------------------------------------


class AssetFileSystem:
    """One node of the overlay: an ordered list of physical roots.

    Nodes may carry named namespace children (owned by this node) and a
    non-owning link to a parent node used for fallback lookups.  The root
    list and namespace registry must not be mutated while a resolution, walk
    or glob on the same overlay is in progress.
    """

    def __init__(
        self,
        roots: Iterable[str | os.PathLike[str]] = (),
        *,
        search_order: str = "forward",
        parent: AssetFileSystem | None = None,
        name: str = "",
        ignore_missing: bool = False,
    ) -> None:
        if search_order not in _SEARCH_ORDERS:
            raise ValueError(
                f"Invalid search_order value: {search_order!r}. "
                "Expected 'forward' or 'reverse'."
            )
        if name:
            if parent is None:
                raise ValueError(f"Namespace '{name}' requires a parent filesystem.")
            _check_namespace_name(name)
        self._search_order: str = search_order
        self._name: str = name
        self._parent_ref: weakref.ref[AssetFileSystem] | None = (
            weakref.ref(parent) if parent is not None else None
        )
        self._path: str = join_path(parent.path if parent is not None else "", name)
        if self._path == ".":
            self._path = ""
        self._ignore_missing: bool = ignore_missing
        self._roots: list[str] = []
        self._namespaces: dict[str, AssetFileSystem] = {}
        self._path_callbacks: list[PathRegisterCallback] = []
        for root in roots:
            self.register_path(root)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(path={self._path!r}, roots={self._roots!r}, "
            f"namespaces={sorted(self._namespaces)!r})"
        )

    # -- attributes --

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> str:
        """Virtual mount path relative to the top of the parent chain."""
        return self._path

    @property
    def parent(self) -> AssetFileSystem | None:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def roots(self) -> tuple[str, ...]:
        return tuple(self._roots)

    @property
    def search_order(self) -> str:
        return self._search_order

    # -- configuration --

    def on_path_register(self, *callbacks: PathRegisterCallback) -> None:
        self._path_callbacks.extend(callbacks)

    def register_path(
        self, path: str | os.PathLike[str], ignore_exists: bool | None = None
    ) -> None:
        """Append a physical root (lowest precedence in forward order)."""
        self._add_root(path, ignore_exists, prepend=False)

    def prepend_path(
        self, path: str | os.PathLike[str], ignore_exists: bool | None = None
    ) -> None:
        """Insert a physical root in front (highest precedence in forward order)."""
        self._add_root(path, ignore_exists, prepend=True)

    def _add_root(
        self, path: str | os.PathLike[str], ignore_exists: bool | None, prepend: bool
    ) -> None:
        real = os.path.abspath(os.fspath(path))
        if ignore_exists is None:
            ignore_exists = self._ignore_missing
        if not os.path.isdir(real):
            if not ignore_exists:
                raise NotADirectoryError(f"Not a directory: '{os.fspath(path)}'")
            logger.debug("registering missing root %s on %r", real, self._path)
        if real in self._roots:
            logger.debug("root %s already registered on %r", real, self._path)
            return
        if prepend:
            self._roots.insert(0, real)
        else:
            self._roots.append(real)
        logger.debug("registered root %s on %r (prepend=%s)", real, self._path, prepend)
        for cb in self._path_callbacks:
            cb(self, real)

    def namespace(self, name: str) -> AssetFileSystem:
        """Return the namespace *name*, creating it on first use."""
        _check_namespace_name(name)
        ns = self._namespaces.get(name)
        if ns is None:
            ns = AssetFileSystem(
                parent=self,
                name=name,
                search_order=self._search_order,
                ignore_missing=self._ignore_missing,
            )
            self._namespaces[name] = ns
            logger.debug("created namespace %r", ns.path)
        return ns

    def get_namespace(self, name: str) -> AssetFileSystem:
        try:
            return self._namespaces[name]
        except KeyError:
            raise NameSpaceNotFoundError(name, self._path) from None

    def namespaces(self) -> list[AssetFileSystem]:
        return list(self._namespaces.values())

    def stats(self) -> AssetStats:
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return AssetStats(
            root_count=len(self._roots),
            namespace_count=len(self._namespaces),
            parent_depth=depth,
            path=self._path,
        )

    # -- search order --

    def iter_roots(self, reverse: bool = False) -> Iterator[str]:
        roots = tuple(self._roots)
        return reversed(roots) if reverse else iter(roots)

    def iter_paths_from(
        self,
        dir: str = ".",
        *,
        reverse: bool | None = None,
        namespaces: bool = True,
        parent: bool = True,
    ) -> Iterator[str]:
        """Yield the physical locations of virtual *dir*, in precedence order.

        The namespace named by the first segment comes first, then this
        node's roots, then the parent chain.  Locations are not checked for
        existence.
        """
        if reverse is None:
            reverse = self._search_order == "reverse"
        return self._paths_from(normalize_path(dir), reverse, namespaces, parent)

    def _paths_from(
        self, vdir: str, reverse: bool, namespaces: bool, parent: bool
    ) -> Iterator[str]:
        if namespaces and vdir != "." and self._namespaces:
            head, rest = split_first(vdir)
            ns = self._namespaces.get(head)
            if ns is not None:
                yield from ns._paths_from(rest, reverse, True, False)
        for root in self.iter_roots(reverse):
            yield _physical(root, vdir)
        owner = self.parent
        if parent and owner is not None:
            yield from owner._paths_from(join_path(self._name, vdir), reverse, False, True)

    # -- resolution --

    def asset_info(
        self,
        path: str,
        ctx: threading.Event | None = None,
        *,
        reverse: bool | None = None,
        namespaces: bool = True,
        parent: bool = True,
    ) -> FileInfo:
        """Resolve virtual *path* to the first physical match.

        *ctx* is only consulted before probing starts: a set event raises
        :class:`ResolveCancelledError`.
        """
        if ctx is not None and ctx.is_set():
            raise ResolveCancelledError(path)
        vpath = normalize_path(path)
        for real in self.iter_paths_from(
            vpath, reverse=reverse, namespaces=namespaces, parent=parent
        ):
            try:
                st = os.stat(real)
            except (FileNotFoundError, NotADirectoryError):
                continue
            logger.debug("resolved %r -> %s", vpath, real)
            return FileInfo.from_stat(vpath, real, st)
        logger.debug("not found: %r in %r", vpath, self._path)
        raise AssetNotFoundError(vpath)

    def asset(self, path: str, ctx: threading.Event | None = None) -> Asset:
        return Asset(self.asset_info(path, ctx))

    def open(
        self,
        path: str,
        mode: str = "rb",
        encoding: str | None = None,
        errors: str | None = None,
    ) -> IO[Any]:
        valid_modes = {"rb", "r"}
        if mode not in valid_modes:
            raise ValueError(
                f"Invalid mode '{mode}'. Assets are read-only: {valid_modes}"
            )
        return self.asset_info(path).open(mode, encoding=encoding, errors=errors)

    def exists(self, path: str) -> bool:
        try:
            self.asset_info(path)
        except (AssetNotFoundError, ValueError):
            return False
        return True

    def is_dir(self, path: str) -> bool:
        try:
            return self.asset_info(path).is_dir
        except (AssetNotFoundError, ValueError):
            return False

    def is_file(self, path: str) -> bool:
        try:
            return not self.asset_info(path).is_dir
        except (AssetNotFoundError, ValueError):
            return False

    # -- traversal --

    def walk(
        self, dir: str, callback: WalkCallback, mode: WalkMode = WALK_ALL
    ) -> None:
        """Invoke *callback* for every entry below virtual *dir*.

        The callback may raise :class:`StopWalk` to end the walk early.
        Entries are not deduplicated: a path present in several roots is
        reported once per root.
        """
        try:
            for info in self.iter_walk(dir, mode):
                callback(info)
        except StopWalk:
            pass

    def iter_walk(self, dir: str = ".", mode: WalkMode = WALK_ALL) -> Iterator[FileInfo]:
        if mode.is_empty:
            return iter(())
        return self._walk(normalize_path(dir), mode)

    def _walk(self, vdir: str, mode: WalkMode) -> Iterator[FileInfo]:
        # namespaces first, with parent look-up off so the walk never climbs
        # back into this node
        if mode.namespaces and self._namespaces:
            inner = mode.with_(namespaces=True, parent=False)
            if vdir == ".":
                for name, ns in list(self._namespaces.items()):
                    for info in ns._walk(".", inner):
                        yield info.relocated(join_path(name, info.path))
            else:
                head, rest = split_first(vdir)
                ns = self._namespaces.get(head)
                if ns is not None:
                    for info in ns._walk(rest, inner):
                        yield info.relocated(join_path(head, info.path))

        for root in self.iter_roots(mode.reverse):
            top = _physical(root, vdir)
            if not os.path.isdir(top):
                continue
            yield from _walk_tree(top, vdir, mode)

        owner = self.parent
        if mode.parent and owner is not None:
            outer = mode.with_(namespaces=False)
            for info in owner._walk(join_path(self._name, vdir), outer):
                if self._name:
                    info = info.relocated(strip_prefix(info.path, self._name))
                yield info

    def read_dir(self, dir: str, callback: WalkCallback) -> None:
        try:
            for info in self.iter_read_dir(dir):
                callback(info)
        except StopWalk:
            pass

    def iter_read_dir(
        self,
        dir: str = ".",
        *,
        reverse: bool | None = None,
        namespaces: bool = True,
        parent: bool = True,
    ) -> Iterator[FileInfo]:
        """Yield the direct children of virtual *dir* from every location.

        Missing locations are skipped; entries are not deduplicated.
        """
        vdir = normalize_path(dir)
        for real_dir in self.iter_paths_from(
            vdir, reverse=reverse, namespaces=namespaces, parent=parent
        ):
            if not os.path.isdir(real_dir):
                continue
            for entry, st in scan_dir(real_dir):
                yield FileInfo.from_stat(join_path(vdir, entry.name), entry.path, st)

    # -- glob --

    def glob(self, pattern: GlobPattern | str, callback: WalkCallback) -> None:
        try:
            for info in self.iter_glob(pattern):
                callback(info)
        except StopWalk:
            pass

    def iter_glob(self, pattern: GlobPattern | str) -> Iterator[FileInfo]:
        """Yield each matching virtual path once; the first location wins."""
        if isinstance(pattern, str):
            pattern = GlobPattern.parse(pattern)
        if not (pattern.allow_files or pattern.allow_dirs):
            return
        if pattern.recursive:
            mode = WALK_ALL.with_(
                dirs=pattern.allow_dirs,
                reverse=self._search_order == "reverse",
            )
            entries = self.iter_walk(pattern.dir, mode)
        else:
            entries = self.iter_read_dir(pattern.dir)
        seen: set[str] = set()
        for info in entries:
            if info.is_dir:
                if not pattern.allow_dirs:
                    continue
            elif not pattern.allow_files:
                continue
            if not pattern.match(info.name):
                continue
            if info.path in seen:
                continue
            seen.add(info.path)
            yield info

    def glob_paths(self, pattern: GlobPattern | str) -> list[str]:
        return [info.path for info in self.iter_glob(pattern)]

    def dump(self, callback: WalkCallback, *ignore: IgnoreFunc) -> None:
        try:
            for info in self.iter_dump(*ignore):
                callback(info)
        except StopWalk:
            pass

    def iter_dump(self, *ignore: IgnoreFunc) -> Iterator[FileInfo]:
        """Yield every file of the merged view once, skipping ignored paths."""
        pattern = GlobPattern(dir=".", name="*", recursive=True)
        for info in self.iter_glob(pattern):
            if any(fn(info.path) for fn in ignore):
                continue
            yield info


def _check_namespace_name(name: str) -> None:
    if not name or name in (".", "..") or "/" in name or "\\" in name:
        raise InvalidNameSpaceError(name)
