import posixpath


def normalize_path(path: str) -> str:
    """Normalize a virtual path to its relative, ``/``-separated form.

    The overlay root is ``"."``.  Leading slashes are dropped, backslashes are
    converted and ``..`` may not climb above the root.
    """
    converted = path.replace("\\", "/")
    if not converted:
        return "."

    # Traversal check: simulate path resolution from root (depth 0)
    parts = converted.split("/")
    depth = 0
    for part in parts:
        if part == "..":
            depth -= 1
            if depth < 0:
                raise ValueError(f"Path traversal attempt detected: '{path}'")
        elif part and part != ".":
            depth += 1

    normalized = posixpath.normpath("/" + converted).lstrip("/")
    return normalized or "."


def join_path(*parts: str) -> str:
    """Join virtual path segments, ignoring empty and root (``"."``) segments."""
    joined = "/".join(p for p in parts if p and p != ".")
    return joined or "."


def split_first(path: str) -> tuple[str, str]:
    """Split *path* on its first separator: ``"a/b/c"`` -> ``("a", "b/c")``."""
    head, _, tail = path.partition("/")
    return head, tail or "."


def strip_prefix(path: str, prefix: str) -> str:
    """Make *path* relative to *prefix*; both are normalized virtual paths."""
    if not prefix or prefix == ".":
        return path
    if path == prefix:
        return "."
    if path.startswith(prefix + "/"):
        return path[len(prefix) + 1:]
    return path
