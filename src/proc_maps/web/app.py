"""Flask application factory for the proc-maps web API.

The ``create_app`` function takes a configuration snapshot (so the
procfs mount can be pointed somewhere else) and returns a Flask app:

- ``GET /api/maps/<pid>`` — parse ``<mount>/<pid>/maps`` and return JSON.
- ``GET /maps/<pid>`` — return the same file re-rendered as canonical text.
- ``POST /api/parse`` — parse ``{"text": ...}`` and return the regions.
- ``POST /api/format`` — format ``{"regions": [...]}`` and return the text.
- ``GET /api/log`` — return the file events, filtered by ``min_level``.
"""

from __future__ import annotations

import io

from flask import Flask, Response, jsonify, request

from proc_maps.document import read_regions, write_regions
from proc_maps.env import Environment
from proc_maps.files import ENCODING, ERRORS, MapsOpenError, read_maps
from proc_maps.logging import Logger, LogLevel
from proc_maps.region import Region

_HTTP_BAD_REQUEST = 400
_HTTP_NOT_FOUND = 404


def create_app(env: Environment | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        env: Configuration snapshot; defaults to the process environment.

    Returns:
        A configured Flask application ready to serve.

    """
    config = env if env is not None else Environment.from_os()
    logger = Logger()

    app = Flask(__name__)

    @app.route("/api/maps/<int:pid>")
    def regions_for(pid: int) -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the parsed regions of process *pid* as JSON."""
        try:
            regions = read_maps(pid, env=config, logger=logger)
        except MapsOpenError as exc:
            return jsonify({"error": str(exc)}), _HTTP_NOT_FOUND
        return jsonify({"pid": pid, "regions": [r.to_dict() for r in regions]})

    @app.route("/maps/<int:pid>")
    def text_for(pid: int) -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the maps of process *pid* re-rendered as text."""
        try:
            regions = read_maps(pid, env=config, logger=logger)
        except MapsOpenError as exc:
            return Response(f"{exc}\n", status=_HTTP_NOT_FOUND, mimetype="text/plain")
        body = write_regions(regions).encode(ENCODING, ERRORS)
        return Response(body, mimetype="text/plain")

    @app.route("/api/parse", methods=["POST"])
    def parse() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Parse posted maps text.

        Expects JSON body: ``{"text": "..."}``

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("text"), str):
            return jsonify({"error": "Missing 'text' field"}), _HTTP_BAD_REQUEST

        # Same newline handling as a maps file opened in text mode.
        regions = read_regions(io.StringIO(data["text"], newline=None))
        return jsonify({"regions": [r.to_dict() for r in regions]})

    @app.route("/api/format", methods=["POST"])
    def format_() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Format posted regions.

        Expects JSON body: ``{"regions": [{...}, ...]}``

        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("regions"), list):
            return jsonify({"error": "Missing 'regions' field"}), _HTTP_BAD_REQUEST

        try:
            regions = [Region.from_dict(item) for item in data["regions"]]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            return jsonify({"error": f"Bad region: {exc}"}), _HTTP_BAD_REQUEST
        return jsonify({"text": write_regions(regions)})

    @app.route("/api/log")
    def log() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the file events recorded by this app.

        Accepts ``?min_level=debug|info|error`` (default ``debug``) and
        ``?source=read_maps`` to narrow the entries.

        """
        level_name = request.args.get("min_level", "debug").upper()
        if level_name not in LogLevel.__members__:
            return jsonify({"error": f"Unknown level: {level_name}"}), _HTTP_BAD_REQUEST

        entries = logger.filter(
            min_level=LogLevel[level_name],
            source=request.args.get("source"),
        )
        return jsonify({"entries": [str(e) for e in entries]})

    return app


def main() -> None:
    """Run the web API development server.

    This is the ``proc-maps-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
