"""Tab completer for the file system shell.

The completer separates **what to complete** (pure logic, fully
testable) from **how to wire it** (readline integration in the REPL).

The ``complete(text, state)`` method is the readline callback.  It
delegates to ``completions(text, line)``, which completes command names
for the first word and paths for later words.  Path candidates come
from ``FileSystem.ls`` run as the shell's current user, so a user is
never offered names they could not list.
"""

from __future__ import annotations

import readline
from typing import TYPE_CHECKING

from py_memfs.errors import FileSystemError
from py_memfs.fs.nodes import NodeKind

if TYPE_CHECKING:
    from py_memfs.shell import Shell


class Completer:
    """Command and path completer attached to one shell."""

    def __init__(self, shell: Shell) -> None:
        """Create a completer for *shell*."""
        self._shell = shell

    def complete(self, text: str, state: int) -> str | None:
        """Readline callback — return the *state*-th candidate for *text*."""
        line = readline.get_line_buffer()
        candidates = self.completions(text, line)
        if state < len(candidates):
            return candidates[state]
        return None

    def completions(self, text: str, line: str) -> list[str]:
        """Return completion candidates for *text* given the whole *line*."""
        words = line.lstrip().split()
        if not words or (len(words) == 1 and not line.endswith(" ")):
            return [cmd for cmd in self._shell.command_names if cmd.startswith(text)]
        if text.startswith("/"):
            return self._complete_paths(text)
        return []

    def _complete_paths(self, text: str) -> list[str]:
        """Complete ``/dir/pre`` to every readable entry of ``/dir`` starting with ``pre``."""
        last_slash = text.rfind("/")
        directory = text[: last_slash + 1]
        prefix = text[last_slash + 1 :]
        fs = self._shell.filesystem
        try:
            if fs.stat(directory, self._shell.user).kind is not NodeKind.DIRECTORY:
                return []
            entries = fs.ls(directory, self._shell.user)
        except FileSystemError:
            return []

        candidates = [
            directory + entry.name + ("/" if entry.is_directory else "")
            for entry in entries
            if entry.name.startswith(prefix)
        ]
        return sorted(candidates)
