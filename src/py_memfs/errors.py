"""Error kinds raised by the file system.

Every failure the file system can report is a subclass of
``FileSystemError``, so adapters (the shell, the web API) can catch one
base class at the user-facing boundary and render the message.

The four primary kinds are:

- **PathAlreadyExistsError** — a creation target is already taken.
- **PathNotFoundError** — the resolver could not locate a segment.
- **PermissionDeniedError** — the permission guard said no.
- **InvalidArgumentError** — malformed input (paths, permissions, users).

Two refinements keep the permission class as the outward signal while
still letting callers tell the cases apart:

- **DirectoryNotEmptyError** — ``rm`` on a non-empty directory without
  ``recursive``.
- **DestinationExistsError** — ``mv``/``cp`` onto a taken name.  It is
  also a ``PathAlreadyExistsError``, so either ``except`` clause works.
"""


class FileSystemError(Exception):
    """Base class for every file system error."""


class PathAlreadyExistsError(FileSystemError):
    """Raised when a creation target name is already in use."""


class PathNotFoundError(FileSystemError):
    """Raised when a path segment cannot be resolved."""


class PermissionDeniedError(FileSystemError):
    """Raised when the actor lacks the capability for an operation."""


class InvalidArgumentError(FileSystemError):
    """Raised for malformed paths, permissions, buffers or principals."""


class DirectoryNotEmptyError(PermissionDeniedError):
    """Raised when removing a non-empty directory without ``recursive``."""


class DestinationExistsError(PermissionDeniedError, PathAlreadyExistsError):
    """Raised when the target of a move or copy is already taken."""
