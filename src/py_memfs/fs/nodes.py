"""Tree nodes — files and directories as one tagged record.

Files and directories share almost everything: metadata, a place in
their parent's ``children`` map, and the same permission checks.  So
instead of a class hierarchy there is a single ``Node`` record with a
``kind`` tag, the same way an inode carries its file type:

- A **file** node owns an ordered list of ``Block`` objects.
- A **directory** node owns a ``children`` dict mapping names to nodes.

Each node also keeps a handle to its parent directory.  With parent
handles, moving or removing a node is a single detach/attach and any
node can report its own absolute path without re-walking the tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from py_memfs.errors import InvalidArgumentError
from py_memfs.fs.blocks import Block, split_into_blocks
from py_memfs.fs.metadata import Metadata

if TYPE_CHECKING:
    from collections.abc import Iterator

ROOT_NAME = "/"


class NodeKind(StrEnum):
    """The kind of object a node represents."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class NodeInfo:
    """Read-only snapshot of a node (returned by stat)."""

    name: str
    path: str
    kind: NodeKind
    owner: str
    size: int
    permissions: dict[str, str]


@dataclass(eq=False)
class Node:
    """A file or directory in the tree.

    ``blocks`` is only used by files and ``children`` only by
    directories; the ``kind`` tag says which one applies.  Nodes compare
    by identity.
    """

    kind: NodeKind
    metadata: Metadata
    parent: Node | None = field(default=None, repr=False)
    blocks: list[Block] = field(default_factory=list)  # pyright: ignore[reportUnknownVariableType]
    children: dict[str, Node] = field(default_factory=dict)  # pyright: ignore[reportUnknownVariableType]

    @classmethod
    def new_file(cls, name: str, owner: str) -> Node:
        """Create a detached, empty file owned by *owner*."""
        return cls(kind=NodeKind.FILE, metadata=Metadata(name=name, owner=owner))

    @classmethod
    def new_directory(cls, name: str, owner: str) -> Node:
        """Create a detached, empty directory owned by *owner*."""
        return cls(kind=NodeKind.DIRECTORY, metadata=Metadata(name=name, owner=owner))

    @property
    def name(self) -> str:
        """Return the node's name within its parent."""
        return self.metadata.name

    @property
    def owner(self) -> str:
        """Return the principal that owns this node."""
        return self.metadata.owner

    @property
    def is_directory(self) -> bool:
        """Return True for directory nodes."""
        return self.kind is NodeKind.DIRECTORY

    @property
    def size(self) -> int:
        """Return the logical size in bytes (always 0 for directories)."""
        return sum(len(block) for block in self.blocks)

    @property
    def path(self) -> str:
        """Return the absolute path, built by following parent handles."""
        parts: list[str] = []
        node: Node | None = self
        while node is not None and node.parent is not None:
            parts.append(node.name)
            node = node.parent
        return "/" + "/".join(reversed(parts))

    # -- File contents -----------------------------------------------------

    def write(self, buffer: bytes | bytearray | memoryview, *, append: bool) -> None:
        """Store *buffer* in new blocks, replacing or extending the content.

        Without *append* the existing blocks are dropped first, so an
        empty buffer truncates the file.
        """
        self._require_file()
        new_blocks = split_into_blocks(buffer)
        if not append:
            self.blocks.clear()
        self.blocks.extend(new_blocks)

    def read(self) -> bytes:
        """Return the full content: every block concatenated in order."""
        self._require_file()
        return b"".join(bytes(block.data) for block in self.blocks)

    def _require_file(self) -> None:
        if self.is_directory:
            msg = f"Is a directory: {self.path}"
            raise InvalidArgumentError(msg)

    # -- Tree structure ----------------------------------------------------

    def attach(self, child: Node) -> None:
        """Link *child* into this directory under its own name."""
        self.children[child.name] = child
        child.parent = self

    def detach(self) -> None:
        """Unlink this node from its parent directory."""
        if self.parent is not None:
            del self.parent.children[self.name]
            self.parent = None

    def is_ancestor_of(self, other: Node) -> bool:
        """Return True if *other* is this node or lies somewhere beneath it."""
        node: Node | None = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def sorted_children(self) -> list[Node]:
        """Return the children ordered by name."""
        return [self.children[name] for name in sorted(self.children)]

    def walk(self) -> Iterator[tuple[Node, int]]:
        """Yield every descendant in pre-order with its depth (children at 0)."""
        stack: list[tuple[Node, int]] = [(child, 0) for child in reversed(self.sorted_children())]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            stack.extend((child, depth + 1) for child in reversed(node.sorted_children()))

    def clone(self, *, name: str, owner: str) -> Node:
        """Return a deep, detached copy named *name* and owned by *owner*.

        Blocks are copied byte for byte; nested directories are copied
        recursively and every new node belongs to *owner*.
        """
        if not self.is_directory:
            copy = Node.new_file(name, owner)
            copy.blocks = [block.copy() for block in self.blocks]
            return copy
        copy = Node.new_directory(name, owner)
        for child in self.sorted_children():
            copy.attach(child.clone(name=child.name, owner=owner))
        return copy

    def to_info(self) -> NodeInfo:
        """Create a read-only snapshot of this node."""
        return NodeInfo(
            name=self.name,
            path=self.path,
            kind=self.kind,
            owner=self.owner,
            size=self.size,
            permissions=self.metadata.permission_strings(),
        )


def new_root(owner: str) -> Node:
    """Create the root directory, named ``/`` and owned by *owner*."""
    return Node.new_directory(ROOT_NAME, owner)
