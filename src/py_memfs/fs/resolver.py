"""Path resolution — turning ``/a/b/c`` into a node.

Paths are absolute and walked component by component from the root
directory, looking each name up in the current directory's children.
Empty components are ignored, so ``//a///b/`` is the same as ``/a/b``.

Two lookups are offered:

- ``resolve(path)`` returns the node the path names.
- ``resolve_parent(path)`` returns the directory that *would* contain
  the last component, plus that component.  Creation, removal and
  renaming all work through this form, since the last component may
  not exist yet.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_memfs.errors import InvalidArgumentError, PathNotFoundError

if TYPE_CHECKING:
    from py_memfs.fs.nodes import Node


def split_path(path: object) -> list[str]:
    """Validate an absolute path and return its non-empty components.

    Examples::

        "/"             → []
        "/docs/a.txt"   → ["docs", "a.txt"]
        "//docs//a/"    → ["docs", "a"]

    Raises:
        InvalidArgumentError: If *path* is not a string, is empty, or
            does not start with ``/``.

    """
    if not isinstance(path, str) or not path:
        msg = f"Invalid path: {path!r}"
        raise InvalidArgumentError(msg)
    if not path.startswith("/"):
        msg = f"Path must be absolute: {path!r}"
        raise InvalidArgumentError(msg)
    return [part for part in path.split("/") if part]


def is_root_path(path: object) -> bool:
    """Return True if *path* is a valid path naming the root directory."""
    return not split_path(path)


class PathResolver:
    """Walks paths from a fixed root directory."""

    def __init__(self, root: Node) -> None:
        """Create a resolver anchored at *root*."""
        self._root = root

    @property
    def root(self) -> Node:
        """Return the root directory."""
        return self._root

    def resolve(self, path: str) -> Node:
        """Return the node named by *path*.

        Raises:
            InvalidArgumentError: If *path* is malformed.
            PathNotFoundError: If a component is missing, or a file is
                reached while components remain.

        """
        return self._walk(split_path(path), path)

    def resolve_parent(self, path: str) -> tuple[Node, str]:
        """Return ``(parent_directory, last_component)`` for *path*.

        Only the parent has to exist; the last component may not.

        Raises:
            InvalidArgumentError: If *path* is malformed or names the root.
            PathNotFoundError: If the parent cannot be resolved to a
                directory.

        """
        parts = split_path(path)
        if not parts:
            msg = "The root directory has no parent"
            raise InvalidArgumentError(msg)
        parent = self._walk(parts[:-1], path)
        if not parent.is_directory:
            msg = f"Not a directory: {parent.path}"
            raise PathNotFoundError(msg)
        return parent, parts[-1]

    def exists(self, path: str) -> bool:
        """Return True if *path* is well formed and resolves to a node."""
        try:
            self.resolve(path)
        except (InvalidArgumentError, PathNotFoundError):
            return False
        return True

    def _walk(self, parts: list[str], path: str) -> Node:
        current = self._root
        for part in parts:
            if not current.is_directory:
                msg = f"Path not found: {path}"
                raise PathNotFoundError(msg)
            child = current.children.get(part)
            if child is None:
                msg = f"Path not found: {path}"
                raise PathNotFoundError(msg)
            current = child
        return current
