"""Flask application factory for the py-memfs JSON API.

The ``create_app`` function creates a file system and a shell and
returns a Flask app with two endpoints:

- ``POST /api/execute`` — execute a command and return JSON.
- ``GET /api/status`` — return the session state.

Each app owns one in-memory file system, so state lives exactly as
long as the process.
"""

from __future__ import annotations

from flask import Flask, Response, jsonify, request

from py_memfs.fs.filesystem import FileSystem
from py_memfs.shell import Shell

_HTTP_BAD_REQUEST = 400


def create_app(filesystem: FileSystem | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        filesystem: File system to serve.  A fresh one is created when
            omitted.

    Returns:
        A configured Flask application ready to serve.

    """
    shell = Shell(filesystem=filesystem if filesystem is not None else FileSystem())
    state = {"halted": False}

    app = Flask(__name__)

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Execute a shell command and return JSON output.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with ``output`` and ``halted`` fields.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("command"), str):
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        if state["halted"]:
            return jsonify({"output": "Session closed.", "halted": True})

        result = shell.execute(data["command"])
        if result == Shell.EXIT_SENTINEL:
            state["halted"] = True
            return jsonify({"output": "Session closed.", "halted": True})

        return jsonify({"output": result, "halted": False})

    @app.route("/api/status")
    def status() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the session state.

        Returns:
            JSON with ``running``, ``user`` and ``users`` fields.

        """
        return jsonify(
            {
                "running": not state["halted"],
                "user": shell.user,
                "users": shell.filesystem.users(),
            }
        )

    return app


def main() -> None:
    """Run the development server.

    This is the ``py-memfs-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
