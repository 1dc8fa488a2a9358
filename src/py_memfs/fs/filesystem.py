"""The operation engine — every file system command in one place.

``FileSystem`` owns the tree, the user registry, the permission guard
and the audit log.  Each public method follows the same recipe:

1. **Validate** the arguments (paths, actor, buffers, permission text).
2. **Resolve** the target, and for mutations its parent directory.
3. **Check** the actor's capability through the permission guard.
4. **Mutate** the tree (or read from it) and record the event.

All validation and checks run before step 4, so a failing call leaves
the tree exactly as it was.

Capabilities required per operation:

============  =========================================  ==========
Operation     Node checked                               Capability
============  =========================================  ==========
mkdir/touch   parent directory                           write
rm            parent directory                           write
write / read  the file                                   write / read
ls            the listed directory (or file)             read
mv            source parent and destination parent       write
cp            source parent / destination parent         read / write
chmod         the node                                   root or owner
============  =========================================  ==========

Two ownership rules are deliberately different: a directory made with
``mkdir`` belongs to its parent directory's owner, while a file made
with ``touch`` (and anything made with ``cp``) belongs to the actor.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

from py_memfs.errors import (
    DestinationExistsError,
    DirectoryNotEmptyError,
    InvalidArgumentError,
    PathAlreadyExistsError,
    PathNotFoundError,
    PermissionDeniedError,
)
from py_memfs.fs.blocks import byte_view
from py_memfs.fs.guard import Capability, PermissionGuard
from py_memfs.fs.listing import ListingEntry
from py_memfs.fs.metadata import Permission
from py_memfs.fs.nodes import Node, NodeKind, new_root
from py_memfs.fs.resolver import PathResolver, is_root_path, split_path
from py_memfs.logging import Logger, LogLevel
from py_memfs.users import ROOT_USER, UserRegistry, validate_principal

if TYPE_CHECKING:
    from py_memfs.fs.nodes import NodeInfo

Buffer: TypeAlias = bytes | bytearray | memoryview


class FileSystem:
    """An in-memory file system with per-user permissions.

    The file system starts with an empty root directory ``/`` owned by
    ``root``.  All paths are absolute.
    """

    def __init__(
        self,
        *,
        users: UserRegistry | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create a file system with an empty root directory.

        Args:
            users: Registry of principals.  A fresh registry containing
                only ``root`` is created when omitted.
            logger: Audit log.  A fresh logger is created when omitted.

        """
        self._logger = logger if logger is not None else Logger()
        self._users = users if users is not None else UserRegistry(logger=self._logger)
        self._root = new_root(ROOT_USER)
        self._resolver = PathResolver(self._root)
        self._guard = PermissionGuard(self._users, logger=self._logger)

    @property
    def logger(self) -> Logger:
        """Return the audit log."""
        return self._logger

    @property
    def root(self) -> Node:
        """Return the root directory node."""
        return self._root

    # -- Users -------------------------------------------------------------

    def add_user(self, principal: str) -> None:
        """Register a new principal.

        Raises:
            InvalidArgumentError: If the name is malformed or taken.

        """
        self._users.add_user(principal)

    def users(self) -> list[str]:
        """Return every known principal, sorted."""
        return self._users.users()

    def is_user(self, principal: str) -> bool:
        """Return True if *principal* may act on this file system."""
        return self._users.is_known(principal)

    # -- Queries -----------------------------------------------------------

    def exists(self, path: str) -> bool:
        """Check whether a path exists.  Never raises."""
        return self._resolver.exists(path)

    def stat(self, path: str, actor: str) -> NodeInfo:
        """Return a snapshot of the node at *path*.

        Raises:
            InvalidArgumentError: If *path* or *actor* is malformed.
            PermissionDeniedError: If *actor* is unknown.
            PathNotFoundError: If the path does not exist.

        """
        split_path(path)
        self._guard.require_actor(actor)
        return self._resolver.resolve(path).to_info()

    # -- Creation ----------------------------------------------------------

    def mkdir(self, path: str, actor: str) -> None:
        """Create a directory at *path*.

        The last path component is the new directory's name and the
        rest must already exist.  The new directory is owned by the
        owner of its parent.

        Raises:
            InvalidArgumentError: If *path* or *actor* is malformed.
            PathAlreadyExistsError: If the name is taken.
            PermissionDeniedError: If the parent is missing, the actor
                is unknown, or the actor cannot write the parent.

        """
        self._create(path, actor, NodeKind.DIRECTORY)

    def touch(self, path: str, actor: str) -> None:
        """Create an empty file at *path*, owned by *actor*.

        Raises:
            InvalidArgumentError: If *path* or *actor* is malformed.
            PathAlreadyExistsError: If the name is taken.
            PermissionDeniedError: If the parent is missing, the actor
                is unknown, or the actor cannot write the parent.

        """
        self._create(path, actor, NodeKind.FILE)

    def _create(self, path: str, actor: str, kind: NodeKind) -> None:
        if is_root_path(path):
            msg = "Already exists: /"
            raise PathAlreadyExistsError(msg)
        actor = self._guard.require_actor(actor)
        try:
            parent, name = self._resolver.resolve_parent(path)
        except PathNotFoundError as e:
            msg = f"Permission denied: cannot create {path}, parent directory not found"
            raise PermissionDeniedError(msg) from e

        if name in parent.children:
            msg = f"Already exists: {path}"
            raise PathAlreadyExistsError(msg)
        self._guard.check(actor, parent, Capability.WRITE)

        if kind is NodeKind.DIRECTORY:
            node = Node.new_directory(name, parent.owner)
            command = "mkdir"
        else:
            node = Node.new_file(name, actor)
            command = "touch"
        parent.attach(node)
        self._record(f"{command} {node.path}", actor)

    # -- Removal -----------------------------------------------------------

    def rm(self, path: str, actor: str, recursive: bool = False) -> None:  # noqa: FBT001, FBT002
        """Remove a file or directory.

        Args:
            path: Absolute path to remove.
            actor: Acting principal.
            recursive: Allow removing a non-empty directory together
                with everything beneath it.

        Raises:
            InvalidArgumentError: If *path* or *actor* is malformed.
            PathNotFoundError: If the path does not exist.
            PermissionDeniedError: If *path* is the root, the actor
                cannot write the parent, or (as ``DirectoryNotEmptyError``)
                the directory is not empty and *recursive* is false.

        """
        is_root = is_root_path(path)
        actor = self._guard.require_actor(actor)
        if is_root:
            msg = "Permission denied: cannot remove the root directory"
            raise PermissionDeniedError(msg)

        parent, name = self._resolver.resolve_parent(path)
        node = self._child(parent, name, path)
        self._guard.check(actor, parent, Capability.WRITE)
        if node.is_directory and node.children and not recursive:
            msg = f"Permission denied: directory not empty: {node.path}"
            raise DirectoryNotEmptyError(msg)

        removed = 1 + sum(1 for _ in node.walk())
        target = node.path
        node.detach()
        self._record(f"rm {target} ({removed} node(s))", actor)

    # -- File contents -----------------------------------------------------

    def write(self, path: str, actor: str, append: bool, buffer: Buffer) -> None:  # noqa: FBT001
        """Write *buffer* to the file at *path*.

        Args:
            path: Absolute path to an existing file.
            actor: Acting principal.
            append: Add to the end instead of replacing the content.
            buffer: The bytes to store.

        Raises:
            InvalidArgumentError: If an argument is malformed or *path*
                is a directory.
            PathNotFoundError: If the file does not exist.
            PermissionDeniedError: If the actor cannot write the file.

        """
        split_path(path)
        actor = self._guard.require_actor(actor)
        if not isinstance(buffer, (bytes, bytearray, memoryview)):
            msg = f"Buffer must be bytes-like, got {type(buffer).__name__}"
            raise InvalidArgumentError(msg)

        node = self._file(path)
        self._guard.check(actor, node, Capability.WRITE)
        data = byte_view(buffer)
        node.write(data, append=append)
        mode = "append" if append else "write"
        self._record(f"{mode} {node.path} ({data.nbytes} bytes)", actor)

    def read(self, path: str, actor: str, buffer: bytearray | memoryview) -> int:
        """Copy the file's content into *buffer*, starting at index 0.

        The buffer is filled byte by byte whatever its item format, so at
        most its size in bytes is copied; bytes past the end of the
        content are left untouched.

        Returns:
            The number of bytes copied.

        Raises:
            InvalidArgumentError: If an argument is malformed, *buffer*
                is not writable and contiguous, or *path* is a directory.
            PathNotFoundError: If the file does not exist.
            PermissionDeniedError: If the actor cannot read the file.

        """
        split_path(path)
        actor = self._guard.require_actor(actor)
        if not isinstance(buffer, (bytearray, memoryview)) or (
            isinstance(buffer, memoryview) and (buffer.readonly or not buffer.c_contiguous)
        ):
            msg = (
                "Buffer must be a writable, contiguous bytearray or memoryview, "
                f"got {type(buffer).__name__}"
            )
            raise InvalidArgumentError(msg)
        target = memoryview(buffer).cast("B")

        node = self._file(path)
        self._guard.check(actor, node, Capability.READ)
        content = node.read()
        count = min(len(content), target.nbytes)
        target[:count] = content[:count]
        self._trace(f"read {node.path} ({count} bytes)", actor)
        return count

    # -- Moving and copying ------------------------------------------------

    def mv(self, old_path: str, new_path: str, actor: str) -> None:
        """Move (or rename) a file or directory.

        The node itself is re-linked; its content and owner are kept.

        Raises:
            InvalidArgumentError: If an argument is malformed or a
                directory would be moved into itself.
            PathNotFoundError: If the source or the destination's parent
                does not exist.
            PermissionDeniedError: If the source is the root, the actor
                cannot write both parents, or (as ``DestinationExistsError``)
                the destination name is taken.

        """
        moving_root = is_root_path(old_path)
        split_path(new_path)
        actor = self._guard.require_actor(actor)
        if moving_root:
            msg = "Permission denied: cannot move the root directory"
            raise PermissionDeniedError(msg)

        src_parent, src_name = self._resolver.resolve_parent(old_path)
        node = self._child(src_parent, src_name, old_path)
        dst_parent, dst_name = self._resolver.resolve_parent(new_path)
        self._guard.check(actor, src_parent, Capability.WRITE)
        self._guard.check(actor, dst_parent, Capability.WRITE)
        if dst_name in dst_parent.children:
            msg = f"Permission denied: destination exists: {new_path}"
            raise DestinationExistsError(msg)
        if node.is_ancestor_of(dst_parent):
            msg = f"Cannot move {node.path} into itself"
            raise InvalidArgumentError(msg)

        source = node.path
        node.detach()
        node.metadata.name = dst_name
        dst_parent.attach(node)
        self._record(f"mv {source} -> {node.path}", actor)

    def cp(
        self,
        src_path: str,
        dst_path: str,
        actor: str,
        recursive: bool = False,  # noqa: FBT001, FBT002
    ) -> None:
        """Copy a file, or a directory tree when *recursive* is set.

        Every new node is owned by *actor* and gets its own copy of the
        data blocks.  The copy is fully built before it is linked in.

        Raises:
            InvalidArgumentError: If an argument is malformed or the
                source is the root.
            PathNotFoundError: If the source or the destination's parent
                does not exist.
            PermissionDeniedError: If the actor cannot read the source's
                parent or write the destination's parent, the source is a
                directory and *recursive* is false, or (as
                ``DestinationExistsError``) the destination name is taken.

        """
        split_path(src_path)
        split_path(dst_path)
        actor = self._guard.require_actor(actor)

        src_parent, src_name = self._resolver.resolve_parent(src_path)
        node = self._child(src_parent, src_name, src_path)
        dst_parent, dst_name = self._resolver.resolve_parent(dst_path)
        self._guard.check(actor, src_parent, Capability.READ)
        self._guard.check(actor, dst_parent, Capability.WRITE)
        if dst_name in dst_parent.children:
            msg = f"Permission denied: destination exists: {dst_path}"
            raise DestinationExistsError(msg)
        if node.is_directory and not recursive:
            msg = f"Permission denied: {node.path} is a directory (recursive copy required)"
            raise PermissionDeniedError(msg)

        copy = node.clone(name=dst_name, owner=actor)
        dst_parent.attach(copy)
        self._record(f"cp {node.path} -> {copy.path}", actor)

    # -- Listing -----------------------------------------------------------

    def ls(
        self,
        path: str,
        actor: str,
        recursive: bool = False,  # noqa: FBT001, FBT002
    ) -> list[ListingEntry]:
        """List a directory.

        Children are listed in name order at depth 0.  In recursive mode
        each readable sub-directory's contents follow it (pre-order),
        one depth level deeper.  Listing a file yields a single entry.

        Raises:
            InvalidArgumentError: If *path* or *actor* is malformed.
            PathNotFoundError: If the path does not exist.
            PermissionDeniedError: If the actor cannot read the target.

        """
        split_path(path)
        actor = self._guard.require_actor(actor)
        node = self._resolver.resolve(path)
        self._guard.check(actor, node, Capability.READ)

        if not node.is_directory:
            return [ListingEntry.from_node(node, depth=0)]
        entries: list[ListingEntry] = []
        self._list_into(entries, node, actor, recursive=recursive, depth=0)
        self._trace(f"ls {node.path}", actor)
        return entries

    def _list_into(
        self,
        entries: list[ListingEntry],
        directory: Node,
        actor: str,
        *,
        recursive: bool,
        depth: int,
    ) -> None:
        for child in directory.sorted_children():
            entries.append(ListingEntry.from_node(child, depth=depth))
            if (
                recursive
                and child.is_directory
                and self._guard.allows(actor, child, Capability.READ)
            ):
                self._list_into(entries, child, actor, recursive=True, depth=depth + 1)

    # -- Permissions -------------------------------------------------------

    def chmod(
        self,
        path: str,
        owner_actor: str,
        target_principal: str,
        permission: str,
    ) -> None:
        """Set *target_principal*'s permission on the node at *path*.

        Args:
            path: Absolute path to a file or directory.
            owner_actor: Acting principal; must be root or the owner.
            target_principal: Principal whose entry is set.
            permission: Three-character string such as ``"rwx"`` or ``"r--"``.

        Raises:
            InvalidArgumentError: If an argument or the permission
                string is malformed.
            PathNotFoundError: If the path does not exist.
            PermissionDeniedError: If *owner_actor* is neither root nor
                the node's owner.

        """
        split_path(path)
        actor = self._guard.require_actor(owner_actor)
        node = self._resolver.resolve(path)
        self._guard.check_owner(actor, node)
        validate_principal(target_principal)
        parsed = Permission.parse(permission)

        node.metadata.grant(target_principal, parsed)
        self._record(f"chmod {node.path} {target_principal}={parsed}", actor)

    # -- Helpers -----------------------------------------------------------

    def _file(self, path: str) -> Node:
        node = self._resolver.resolve(path)
        if node.is_directory:
            msg = f"Is a directory: {node.path}"
            raise InvalidArgumentError(msg)
        return node

    @staticmethod
    def _child(parent: Node, name: str, path: str) -> Node:
        node = parent.children.get(name)
        if node is None:
            msg = f"Path not found: {path}"
            raise PathNotFoundError(msg)
        return node

    def _record(self, message: str, actor: str) -> None:
        self._logger.log(LogLevel.INFO, message, source="fs", actor=actor)

    def _trace(self, message: str, actor: str) -> None:
        self._logger.log(LogLevel.DEBUG, message, source="fs", actor=actor)
