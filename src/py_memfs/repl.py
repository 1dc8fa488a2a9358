"""Interactive REPL (Read-Eval-Print Loop) for the file system.

The REPL creates a fresh file system, wraps it in a shell, and loops:

    1. **Read** — display a prompt and read user input.
    2. **Eval** — pass the command to ``shell.execute()``.
    3. **Print** — display the result.
    4. **Loop** — repeat until the shell returns the exit sentinel.

The helper functions (``build_prompt``, ``format_banner``) are pure and
testable.  ``run()`` is the I/O entry point behind the ``py-memfs``
console script.
"""

import readline

from py_memfs.completer import Completer
from py_memfs.fs.blocks import BLOCK_SIZE
from py_memfs.fs.filesystem import FileSystem
from py_memfs.shell import Shell

_BANNER_WIDTH = 38


def format_banner() -> str:
    """Return the start-up banner."""
    border = "=" * _BANNER_WIDTH
    return (
        f"\n  {border}\n                py-memfs\n"
        f"     An in-memory file system\n  {border}\n\n"
        f"  Block size: {BLOCK_SIZE} bytes\n"
        "\nType 'help' for commands, 'exit' to quit.\n"
    )


def build_prompt(shell: Shell) -> str:
    """Build the prompt string showing the current user, e.g. ``root@memfs $ ``."""
    return f"{shell.user}@memfs $ "


def run() -> None:
    """Run the interactive REPL until ``exit``, Ctrl+D, or Ctrl+C."""
    shell = Shell(filesystem=FileSystem())

    completer = Completer(shell)
    readline.set_completer(completer.complete)
    readline.set_completer_delims(" \t")
    readline.parse_and_bind("tab: complete")

    print(format_banner())  # noqa: T201

    try:
        while True:
            try:
                command = input(build_prompt(shell))
            except EOFError:
                # Ctrl+D
                print()  # noqa: T201
                break

            result = shell.execute(command)
            if result == Shell.EXIT_SENTINEL:
                break
            if result:
                print(result)  # noqa: T201

    except KeyboardInterrupt:
        print("\nInterrupted.")  # noqa: T201

    finally:
        print("Bye.")  # noqa: T201
