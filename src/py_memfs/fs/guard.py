"""Permission guard — the single place that answers "may A do C on N?".

Every file system operation funnels its access decisions through one
``PermissionGuard`` so the rules are applied identically everywhere:

1. The actor must be a registered principal (or ``root``).
2. ``root`` is allowed everything.
3. Otherwise the node's permission map is consulted for the actor.
   No entry means no access; an entry grants exactly the capabilities
   whose slot is set.

Ownership is a separate question: only ``root`` or a node's owner may
change that node's permissions (``check_owner``).

Every refusal is written to the audit log before the error is raised.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from py_memfs.errors import InvalidArgumentError, PermissionDeniedError
from py_memfs.logging import LogLevel
from py_memfs.users import ROOT_USER

if TYPE_CHECKING:
    from py_memfs.fs.nodes import Node
    from py_memfs.logging import Logger
    from py_memfs.users import UserRegistry


class Capability(StrEnum):
    """The atomic units of permission."""

    READ = "read"
    WRITE = "write"
    EXECUTE = "execute"


class PermissionGuard:
    """Central access-control predicate backed by a user registry."""

    def __init__(self, users: UserRegistry, *, logger: Logger | None = None) -> None:
        """Create a guard.

        Args:
            users: Registry used to decide whether an actor is known.
            logger: Optional audit log for denied checks.

        """
        self._users = users
        self._logger = logger

    def require_actor(self, actor: object) -> str:
        """Return *actor* if it may act at all.

        Raises:
            InvalidArgumentError: If *actor* is missing or not a string.
            PermissionDeniedError: If *actor* is not a known principal.

        """
        if not isinstance(actor, str) or not actor:
            msg = f"Invalid actor: {actor!r}"
            raise InvalidArgumentError(msg)
        if actor != ROOT_USER and not self._users.is_known(actor):
            self._deny(actor, f"unknown user {actor}")
        return actor

    def allows(self, actor: str, node: Node, capability: Capability) -> bool:
        """Return True if *actor* holds *capability* on *node*."""
        if actor == ROOT_USER:
            return True
        permission = node.metadata.permission_for(actor)
        if permission is None:
            return False
        match capability:
            case Capability.READ:
                return permission.read
            case Capability.WRITE:
                return permission.write
            case Capability.EXECUTE:
                return permission.execute

    def check(self, actor: str, node: Node, capability: Capability) -> None:
        """Raise unless *actor* holds *capability* on *node*.

        Raises:
            PermissionDeniedError: If access is denied.

        """
        if not self.allows(actor, node, capability):
            self._deny(actor, f"{capability} denied on {node.path}")

    def check_owner(self, actor: str, node: Node) -> None:
        """Raise unless *actor* is root or owns *node*.

        Raises:
            PermissionDeniedError: If *actor* may not change *node*'s
                permissions.

        """
        if actor not in (ROOT_USER, node.owner):
            self._deny(actor, f"only root or {node.owner} may change {node.path}")

    def _deny(self, actor: str, reason: str) -> None:
        if self._logger is not None:
            self._logger.log(LogLevel.WARNING, reason, source="guard", actor=actor)
        msg = f"Permission denied: {reason}"
        raise PermissionDeniedError(msg)
