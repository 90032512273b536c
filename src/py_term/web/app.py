"""Flask application factory for the py-term web UI.

The ``create_app`` function builds a filesystem, starts a shell, and
returns a Flask app with four endpoints:

- ``GET /`` — render the terminal page with the login output.
- ``POST /api/input`` — feed raw keystrokes, return the produced output.
- ``POST /api/execute`` — run one command line, return output and exit code.
- ``GET /api/status`` — return the user, working directory and last exit code.

The shell lives on a private asyncio event loop owned by the app.  Each
request runs the loop until the shell is idle again; a lock keeps
requests from the threaded dev server from entering the loop at once.
Host callbacks (``open``, ``edit``) are collected as ``actions`` in the
JSON response so the page can react to them.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Any

from flask import Flask, Response, jsonify, render_template, request

from py_term.bootstrap import build_filesystem
from py_term.command import HostCallbacks
from py_term.shell import Shell
from py_term.testing import StringOutput

_HTTP_BAD_REQUEST = 400


class _Session:
    """A shell plus the loop, output buffer and actions it reports into."""

    def __init__(self) -> None:
        self.output = StringOutput()
        self.actions: list[dict[str, str]] = []
        self.loop = asyncio.new_event_loop()
        self.lock = threading.Lock()
        host = HostCallbacks(
            on_open=lambda target: self.actions.append({"type": "open", "target": target}),
            on_editor=lambda path: self.actions.append({"type": "edit", "target": path}),
        )
        self.shell = Shell(fs=build_filesystem(), stdout=self.output, host=host)
        self.loop.run_until_complete(self.shell.start())
        self.login_output = self.output.take()

    def run(self, coro_fn: Any) -> tuple[Any, str, list[dict[str, str]]]:
        """Run ``coro_fn()`` on the loop; return (result, output, actions)."""
        with self.lock:
            result = self.loop.run_until_complete(coro_fn())
            actions = list(self.actions)
            self.actions.clear()
            return result, self.output.take(), actions


def create_app() -> Flask:
    """Create and configure the Flask application.

    Returns:
        A configured Flask application ready to serve.

    """
    session = _Session()
    shell = session.shell

    app = Flask(__name__)

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the terminal page."""
        return render_template("index.html", login_output=session.login_output)

    @app.route("/api/input", methods=["POST"])
    def feed_input() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Feed raw keystrokes to the shell.

        Expects JSON body: ``{"data": "..."}``

        Returns:
            JSON with ``output`` and ``actions`` fields.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("data"), str):
            return jsonify({"error": "Missing 'data' field"}), _HTTP_BAD_REQUEST

        async def feed() -> None:
            shell.handle_input(data["data"])
            await shell.wait_idle()

        _result, output, actions = session.run(feed)
        return jsonify({"output": output, "actions": actions})

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Execute one command line and return JSON output.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with ``output``, ``exit_code`` and ``actions`` fields.

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("command"), str):
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        exit_code, output, actions = session.run(lambda: shell.execute_command(data["command"]))
        return jsonify({"output": output, "exit_code": exit_code, "actions": actions})

    @app.route("/api/status")
    def status() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return session status.

        Returns:
            JSON with ``user``, ``cwd`` and ``exit_code`` fields.

        """
        return jsonify(
            {
                "user": shell.env.get("USER"),
                "cwd": shell.cwd,
                "exit_code": shell.env.exit_code,
            }
        )

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``py-term-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
