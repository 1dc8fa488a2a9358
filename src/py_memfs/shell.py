"""The shell — a command interpreter over the file system.

The shell reads a command string, splits it into a command name and
arguments, dispatches to the matching handler, and returns a string.
It keeps one piece of state of its own: the current user, which is
passed as the actor to every file system call.

Design choices:
    - **Returns strings, not prints.**  The shell is fully testable and
      the caller (REPL, web API) decides how to display output.
    - **Command dispatch via a dict.**  Adding a command means writing a
      method and adding one dict entry.
    - **Errors become text.**  Every ``FileSystemError`` is caught here
      and rendered as ``Error: ...``; the shell never raises one.
"""

from collections.abc import Callable
from typing import TypeAlias

from py_memfs.errors import FileSystemError
from py_memfs.fs.filesystem import FileSystem
from py_memfs.fs.listing import format_listing
from py_memfs.users import ROOT_USER

_Handler: TypeAlias = Callable[[list[str]], str]

_RECURSIVE_FLAG = "-r"
_APPEND_FLAG = "-a"
_LONG_FLAG = "-l"


def _split_flags(args: list[str], *flags: str) -> tuple[set[str], list[str]]:
    """Separate leading option flags from positional arguments."""
    found: set[str] = set()
    rest: list[str] = []
    for arg in args:
        if arg in flags:
            found.add(arg)
        else:
            rest.append(arg)
    return found, rest


class Shell:
    """Command interpreter bound to one file system."""

    EXIT_SENTINEL = "__EXIT__"

    def __init__(self, *, filesystem: FileSystem, user: str = ROOT_USER) -> None:
        """Create a shell acting as *user* (root by default).

        Args:
            filesystem: The file system every command operates on.
            user: Initial current user; must be known to *filesystem*.

        Raises:
            ValueError: If *user* is not a known principal.

        """
        if not filesystem.is_user(user):
            msg = f"Unknown user: {user}"
            raise ValueError(msg)

        self._fs = filesystem
        self._user = user
        self._commands: dict[str, _Handler] = {
            "help": self._cmd_help,
            "whoami": self._cmd_whoami,
            "su": self._cmd_su,
            "adduser": self._cmd_adduser,
            "users": self._cmd_users,
            "ls": self._cmd_ls,
            "mkdir": self._cmd_mkdir,
            "touch": self._cmd_touch,
            "write": self._cmd_write,
            "cat": self._cmd_cat,
            "rm": self._cmd_rm,
            "mv": self._cmd_mv,
            "cp": self._cmd_cp,
            "chmod": self._cmd_chmod,
            "stat": self._cmd_stat,
            "log": self._cmd_log,
            "exit": self._cmd_exit,
        }

    @property
    def user(self) -> str:
        """Return the current user."""
        return self._user

    @property
    def filesystem(self) -> FileSystem:
        """Return the file system this shell operates on."""
        return self._fs

    @property
    def command_names(self) -> list[str]:
        """Return the sorted names of every command."""
        return sorted(self._commands)

    def execute(self, command: str) -> str:
        """Parse and execute one command line."""
        parts = command.strip().split()
        if not parts:
            return ""

        name, args = parts[0], parts[1:]
        handler = self._commands.get(name)
        if handler is None:
            return f"Unknown command: {name}"
        try:
            return handler(args)
        except FileSystemError as e:
            return f"Error: {e}"

    # -- Session -----------------------------------------------------------

    def _cmd_help(self, _args: list[str]) -> str:
        """List available commands."""
        return "Available commands: " + ", ".join(sorted(self._commands))

    def _cmd_whoami(self, _args: list[str]) -> str:
        """Show the current user."""
        return self._user

    def _cmd_su(self, args: list[str]) -> str:
        """Switch to another user."""
        if not args:
            return "Usage: su <user>"
        if not self._fs.is_user(args[0]):
            return f"Error: unknown user '{args[0]}'"
        self._user = args[0]
        return f"Switched to {self._user}"

    def _cmd_adduser(self, args: list[str]) -> str:
        """Register a new user."""
        if not args:
            return "Usage: adduser <user>"
        self._fs.add_user(args[0])
        return f"User '{args[0]}' created"

    def _cmd_users(self, _args: list[str]) -> str:
        """List known users."""
        return "\n".join(self._fs.users())

    def _cmd_log(self, _args: list[str]) -> str:
        """Show the audit log."""
        entries = self._fs.logger.entries
        return "\n".join(str(e) for e in entries) if entries else "No log entries."

    def _cmd_exit(self, _args: list[str]) -> str:
        """Signal the caller to stop."""
        return self.EXIT_SENTINEL

    # -- File system -------------------------------------------------------

    def _cmd_ls(self, args: list[str]) -> str:
        """List directory contents."""
        flags, rest = _split_flags(args, _RECURSIVE_FLAG, _LONG_FLAG)
        path = rest[0] if rest else "/"
        entries = self._fs.ls(path, self._user, _RECURSIVE_FLAG in flags)
        return format_listing(entries, long=_LONG_FLAG in flags)

    def _cmd_mkdir(self, args: list[str]) -> str:
        """Create a directory."""
        if not args:
            return "Usage: mkdir <path>"
        self._fs.mkdir(args[0], self._user)
        return ""

    def _cmd_touch(self, args: list[str]) -> str:
        """Create an empty file."""
        if not args:
            return "Usage: touch <path>"
        self._fs.touch(args[0], self._user)
        return ""

    def _cmd_write(self, args: list[str]) -> str:
        """Write (or with -a, append) text to a file.

        The command line is split on whitespace, so the words after the
        path are stored joined by single spaces.
        """
        flags, rest = _split_flags(args, _APPEND_FLAG)
        if len(rest) < 2:  # noqa: PLR2004
            return "Usage: write [-a] <path> <words...> (words are joined by single spaces)"
        content = " ".join(rest[1:])
        self._fs.write(rest[0], self._user, _APPEND_FLAG in flags, content.encode())
        return ""

    def _cmd_cat(self, args: list[str]) -> str:
        """Print a file's contents."""
        if not args:
            return "Usage: cat <path>"
        info = self._fs.stat(args[0], self._user)
        buffer = bytearray(info.size)
        self._fs.read(args[0], self._user, buffer)
        return buffer.decode(errors="replace")

    def _cmd_rm(self, args: list[str]) -> str:
        """Remove a file or (with -r) a directory tree."""
        flags, rest = _split_flags(args, _RECURSIVE_FLAG)
        if not rest:
            return "Usage: rm [-r] <path>"
        self._fs.rm(rest[0], self._user, _RECURSIVE_FLAG in flags)
        return ""

    def _cmd_mv(self, args: list[str]) -> str:
        """Move or rename a file or directory."""
        if len(args) < 2:  # noqa: PLR2004
            return "Usage: mv <src> <dst>"
        self._fs.mv(args[0], args[1], self._user)
        return ""

    def _cmd_cp(self, args: list[str]) -> str:
        """Copy a file or (with -r) a directory tree."""
        flags, rest = _split_flags(args, _RECURSIVE_FLAG)
        if len(rest) < 2:  # noqa: PLR2004
            return "Usage: cp [-r] <src> <dst>"
        self._fs.cp(rest[0], rest[1], self._user, _RECURSIVE_FLAG in flags)
        return ""

    def _cmd_chmod(self, args: list[str]) -> str:
        """Set a user's permission on a node."""
        if len(args) < 3:  # noqa: PLR2004
            return "Usage: chmod <path> <user> <rwx>"
        self._fs.chmod(args[0], self._user, args[1], args[2])
        return ""

    def _cmd_stat(self, args: list[str]) -> str:
        """Show a node's metadata."""
        if not args:
            return "Usage: stat <path>"
        info = self._fs.stat(args[0], self._user)
        perms = ", ".join(f"{who}={perm}" for who, perm in info.permissions.items())
        return (
            f"  Path: {info.path}\n"
            f"  Type: {info.kind}\n"
            f"  Size: {info.size}\n"
            f"  Owner: {info.owner}\n"
            f"  Access: {perms}"
        )
