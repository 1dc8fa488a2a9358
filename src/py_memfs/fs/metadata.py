"""Node metadata — name, owner, and the per-principal permission map.

Permissions are per principal rather than Unix's owner/group/other
triple: each node keeps a mapping ``principal → Permission``.  A
principal missing from the map has no access at all (root excepted,
which the permission guard lets through unconditionally).

A ``Permission`` is three booleans — read, write, execute.  The
three-character text form (``"rwx"``, ``"r--"``, ``"-wx"``) only exists
at the boundary: ``Permission.parse`` reads it, ``str()`` writes it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from py_memfs.errors import InvalidArgumentError

_PERMISSION_LENGTH = 3
_PERMISSION_CHARS = frozenset("rwx-")


@dataclass(frozen=True)
class Permission:
    """The capabilities one principal holds on one node."""

    read: bool = False
    write: bool = False
    execute: bool = False

    @classmethod
    def parse(cls, text: object) -> Permission:
        """Parse a three-character permission string.

        Each of ``r``, ``w`` and ``x`` grants its capability wherever it
        appears; ``-`` is the filler for a denied slot.  ``"rwx"`` and
        ``"xwr"`` both grant everything.

        Raises:
            InvalidArgumentError: If *text* is not exactly three
                characters drawn from ``r``, ``w``, ``x`` and ``-``.

        """
        if not isinstance(text, str) or len(text) != _PERMISSION_LENGTH:
            msg = f"Invalid permission string: {text!r}"
            raise InvalidArgumentError(msg)
        if not set(text) <= _PERMISSION_CHARS:
            msg = f"Invalid permission string: {text!r}"
            raise InvalidArgumentError(msg)
        return cls(read="r" in text, write="w" in text, execute="x" in text)

    def __str__(self) -> str:
        """Return the canonical ``rwx`` form, with ``-`` for denied slots."""
        return (
            ("r" if self.read else "-")
            + ("w" if self.write else "-")
            + ("x" if self.execute else "-")
        )


FULL_ACCESS = Permission(read=True, write=True, execute=True)


@dataclass
class Metadata:
    """Name, owner and permission map shared by files and directories.

    On creation the owner is granted ``rwx``.  Entries are only ever
    added or overwritten, never removed.
    """

    name: str
    owner: str
    permissions: dict[str, Permission] = field(default_factory=dict)  # pyright: ignore[reportUnknownVariableType]

    def __post_init__(self) -> None:
        """Grant the owner full access."""
        if not self.owner:
            msg = "A node must have an owner"
            raise InvalidArgumentError(msg)
        self.permissions[self.owner] = FULL_ACCESS

    def permission_for(self, principal: str) -> Permission | None:
        """Return the permission recorded for *principal*, if any."""
        return self.permissions.get(principal)

    def grant(self, principal: str, permission: Permission) -> None:
        """Set *principal*'s permission, replacing any previous entry."""
        self.permissions[principal] = permission

    def permission_strings(self) -> dict[str, str]:
        """Return the permission map in its textual form, sorted by principal."""
        return {p: str(self.permissions[p]) for p in sorted(self.permissions)}
