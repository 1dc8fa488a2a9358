"""File system subsystem — blocks, nodes, path resolution, and permissions.

Re-exports public symbols so callers can write::

    from py_memfs.fs import FileSystem, ListingEntry
"""

from py_memfs.fs.blocks import BLOCK_SIZE, Block
from py_memfs.fs.filesystem import FileSystem
from py_memfs.fs.guard import Capability, PermissionGuard
from py_memfs.fs.listing import ListingEntry, format_listing
from py_memfs.fs.metadata import FULL_ACCESS, Metadata, Permission
from py_memfs.fs.nodes import Node, NodeInfo, NodeKind
from py_memfs.fs.resolver import PathResolver, split_path

__all__ = [
    "BLOCK_SIZE",
    "FULL_ACCESS",
    "Block",
    "Capability",
    "FileSystem",
    "ListingEntry",
    "Metadata",
    "Node",
    "NodeInfo",
    "NodeKind",
    "PathResolver",
    "Permission",
    "PermissionGuard",
    "format_listing",
    "split_path",
]
