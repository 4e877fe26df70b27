"""Flask application factory for the Stellar Terminal web UI.

The ``create_app`` function starts a ``Session`` and returns a Flask app
whose endpoints map one-to-one onto the session's inbound events
(submit a line, tab, up/down, cycle theme).  Every response carries the
scrollback records the event produced, so the page only ever appends.

Commands run to completion inside the request; Flask's request model
has no channel for a mid-command Ctrl+C, so cancellation is a REPL-only
feature.
"""

from __future__ import annotations

from flask import Flask, Response, jsonify, render_template, request

from stellar_term.errors import SessionBusyError
from stellar_term.session import InputLine, LineRecord, Session

_HTTP_BAD_REQUEST = 400
_HTTP_CONFLICT = 409
_HISTORY_DIRECTIONS = ("up", "down")


def record_to_dict(record: LineRecord) -> dict[str, str]:
    """Return the JSON shape of one scrollback record."""
    data = {"kind": record.kind, "text": record.text}
    if isinstance(record, InputLine):
        data["prompt"] = record.prompt()
    return data


def _field(name: str) -> str | None:
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or name not in data:
        return None
    return str(data[name])  # pyright: ignore[reportUnknownArgumentType]


def _missing(name: str) -> tuple[Response, int]:
    return jsonify({"error": f"Missing '{name}' field"}), _HTTP_BAD_REQUEST


def _busy() -> tuple[Response, int]:
    return jsonify({"error": "a command is already running"}), _HTTP_CONFLICT


def create_app(session: Session | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        session: The session to serve (a fresh one by default).  Its
            link opener is replaced: ``open`` URLs go back to the page.

    Returns:
        A configured Flask application ready to serve.

    """
    opened: list[str] = []
    if session is None:
        session = Session()
    session.open_link = opened.append
    session.welcome()

    app = Flask(__name__)

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Render the terminal HTML page."""
        return render_template(
            "index.html",
            lines=[record_to_dict(record) for record in session.scrollback],
            prompt=session.prompt(),
            theme=session.theme.to_dict(),
        )

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run one line and return the records it produced.

        Expects JSON body: ``{"command": "..."}``

        Returns:
            JSON with ``lines``, ``cleared``, ``cwd``, ``prompt`` and
            ``open`` (URLs for the page to open in new tabs), or a 409
            error while another request's command is still running.

        """
        command = _field("command")
        if command is None:
            return _missing("command")

        if session.running:
            return _busy()
        opened.clear()
        try:
            turn = session.run(command)
        except SessionBusyError:
            return _busy()
        return jsonify(
            {
                "lines": [record_to_dict(record) for record in turn.records],
                "cleared": turn.cleared,
                "cwd": session.cwd,
                "prompt": session.prompt(),
                "open": list(opened),
            }
        )

    @app.route("/api/complete", methods=["POST"])
    def complete() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Tab-complete the input line.

        Expects JSON body: ``{"line": "..."}``

        Returns:
            JSON with the new ``line`` and any ``lines`` to display.

        """
        line = _field("line")
        if line is None:
            return _missing("line")

        before = len(session.scrollback)
        completed = session.complete(line)
        shown = session.scrollback[before:]
        return jsonify({"line": completed, "lines": [record_to_dict(r) for r in shown]})

    @app.route("/api/history", methods=["POST"])
    def history() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Step through submitted lines.

        Expects JSON body: ``{"direction": "up" | "down"}``

        Returns:
            JSON with ``line`` (null when the input box should not change).

        """
        direction = _field("direction")
        if direction is None:
            return _missing("direction")
        if direction not in _HISTORY_DIRECTIONS:
            return jsonify({"error": f"Unknown direction '{direction}'"}), _HTTP_BAD_REQUEST

        line = session.history_up() if direction == "up" else session.history_down()
        return jsonify({"line": line})

    @app.route("/api/interrupt", methods=["POST"])
    def interrupt() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Abandon the half-typed line (Ctrl+C at the prompt).

        Expects JSON body: ``{"line": "..."}``
        """
        line = _field("line")
        if line is None:
            return _missing("line")

        before = len(session.scrollback)
        session.interrupt(line)
        shown = session.scrollback[before:]
        return jsonify({"lines": [record_to_dict(r) for r in shown]})

    @app.route("/api/clear", methods=["POST"])
    def clear() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Empty the scrollback (Ctrl+L)."""
        session.clear()
        return jsonify({"cleared": True})

    @app.route("/api/theme", methods=["POST"])
    def theme() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Cycle the colour theme and return the new palette."""
        return jsonify(session.cycle_theme().to_dict())

    @app.route("/api/status")
    def status() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return session status for the page header.

        Returns:
            JSON with ``running``, ``cwd``, ``prompt`` and ``theme`` fields.

        """
        return jsonify(
            {
                "running": session.running,
                "cwd": session.cwd,
                "prompt": session.prompt(),
                "theme": str(session.theme.name),
            }
        )

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``stellar-term-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
