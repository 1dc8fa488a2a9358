"""User registry — the set of principals the file system recognises.

Principals are plain strings.  The registry always contains ``root``,
the superuser for whom every permission check succeeds.  Other users
are added explicitly with ``add_user``; every operation's actor must be
a registered principal, otherwise the permission guard refuses it.

Think of this as a stripped-down ``/etc/passwd``: there are no numeric
uids and no groups, just names.
"""

from py_memfs.errors import InvalidArgumentError
from py_memfs.logging import Logger, LogLevel

ROOT_USER = "root"


def validate_principal(principal: object) -> str:
    """Return *principal* if it is a usable name, else raise.

    A principal must be a non-empty string without ``/`` or whitespace.

    Raises:
        InvalidArgumentError: If the name is malformed.

    """
    if not isinstance(principal, str) or not principal:
        msg = f"Invalid principal: {principal!r}"
        raise InvalidArgumentError(msg)
    if "/" in principal or any(ch.isspace() for ch in principal):
        msg = f"Invalid principal: {principal!r}"
        raise InvalidArgumentError(msg)
    return principal


class UserRegistry:
    """Registry of known principals, seeded with ``root``."""

    def __init__(self, *, logger: Logger | None = None) -> None:
        """Create a registry containing only the root principal.

        Args:
            logger: Optional audit log that records new users.

        """
        self._users: set[str] = {ROOT_USER}
        self._logger = logger

    def add_user(self, principal: str) -> None:
        """Register a new principal.

        Args:
            principal: The name to add.

        Raises:
            InvalidArgumentError: If the name is malformed or already taken.

        """
        validate_principal(principal)
        if principal in self._users:
            msg = f"User '{principal}' already exists"
            raise InvalidArgumentError(msg)
        self._users.add(principal)
        if self._logger is not None:
            self._logger.log(
                LogLevel.INFO, f"added user {principal}", source="users", actor=ROOT_USER
            )

    def is_known(self, principal: object) -> bool:
        """Return True if *principal* is root or a registered user."""
        return isinstance(principal, str) and principal in self._users

    def users(self) -> list[str]:
        """Return every registered principal, sorted."""
        return sorted(self._users)

    def __contains__(self, principal: object) -> bool:
        """Support ``"alice" in registry``."""
        return self.is_known(principal)

    def __len__(self) -> int:
        """Return the number of registered principals (root included)."""
        return len(self._users)
