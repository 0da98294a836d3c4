class AssetNotFoundError(FileNotFoundError):
    """Raised when a virtual path matches no root in any reachable node. Subclass of FileNotFoundError."""
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Asset not found: '{path}'")


class NameSpaceNotFoundError(AssetNotFoundError):
    """Raised when a namespace is not registered on a node. Subclass of AssetNotFoundError."""
    def __init__(self, name: str, parent_path: str = "") -> None:
        self.name = name
        self.parent_path = parent_path
        super().__init__(f"{parent_path}/{name}".lstrip("/"))
        self.args = (
            f"Namespace not found: '{name}' in '{parent_path or '.'}'.",
        )


class InvalidNameSpaceError(ValueError):
    """Raised when a namespace name is empty or contains a path separator."""
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid namespace name: '{name}'")


class ResolveCancelledError(OSError):
    """Raised when a resolution is requested with an already cancelled context."""
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Resolution cancelled: '{path}'")


class StopWalk(Exception):
    """Raise from a walk/glob callback to end the traversal without error."""
