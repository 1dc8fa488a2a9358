"""Directory listings — structured ``ls`` results and their text form.

``FileSystem.ls`` never prints.  It returns a list of ``ListingEntry``
records (name, kind, depth, ...) and leaves presentation to whoever
called it.  ``format_listing`` is the default presentation used by the
shell: one entry per line, indented two spaces per level, with a
trailing ``/`` on directories.
"""

from __future__ import annotations

from dataclasses import dataclass

from py_memfs.fs.nodes import Node, NodeKind

_INDENT = "  "


@dataclass(frozen=True)
class ListingEntry:
    """One line of a directory listing."""

    name: str
    kind: NodeKind
    depth: int
    path: str
    size: int
    owner: str

    @classmethod
    def from_node(cls, node: Node, *, depth: int) -> ListingEntry:
        """Describe *node* at the given depth."""
        return cls(
            name=node.name,
            kind=node.kind,
            depth=depth,
            path=node.path,
            size=node.size,
            owner=node.owner,
        )

    @property
    def is_directory(self) -> bool:
        """Return True if this entry is a directory."""
        return self.kind is NodeKind.DIRECTORY


def format_listing(entries: list[ListingEntry], *, long: bool = False) -> str:
    """Render *entries* as indented text.

    Args:
        entries: Entries in the order ``ls`` produced them.
        long: Also show owner and size, like ``ls -l``.

    """
    lines: list[str] = []
    for entry in entries:
        label = entry.name + ("/" if entry.is_directory else "")
        text = f"{_INDENT * entry.depth}{label}"
        if long:
            text = f"{entry.owner:<10} {entry.size:>8}  {text}"
        lines.append(text)
    return "\n".join(lines)
