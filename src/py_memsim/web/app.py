"""Flask application factory for the py-memsim web API.

The ``create_app`` function builds an audit ``Logger`` and returns a
Flask app whose routes parse JSON, call the engines, and return their
results as JSON.  Parsing and bounds checks live here; the engines
never see raw text.
"""

from __future__ import annotations

from typing import Any

from flask import Flask, Response, jsonify, request

from py_memsim.config import Settings
from py_memsim.errors import InvalidInputError
from py_memsim.logging import Logger, LogLevel
from py_memsim.memory import Strategy, fifo_page_replacement, run_comparison
from py_memsim.parsing import coerce_numbers

_HTTP_BAD_REQUEST = 400


def _json_body() -> dict[str, Any]:
    """Return the request's JSON object or raise InvalidInputError."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        msg = "Request body must be a JSON object"
        raise InvalidInputError(msg)
    return data


def create_app(settings: Settings | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        settings: Defaults and bounds; ``Settings()`` if omitted.

    Returns:
        A configured Flask application ready to serve.

    """
    settings = settings or Settings()
    logger = Logger(min_level=settings.log_level)

    app = Flask(__name__)

    @app.errorhandler(InvalidInputError)
    def invalid_input(error: InvalidInputError) -> tuple[Response, int]:  # pyright: ignore[reportUnusedFunction]
        """Log the rejection and report it as a 400."""
        logger.log(LogLevel.WARNING, f"{request.path}: {error}", source="web")
        return jsonify({"error": str(error)}), _HTTP_BAD_REQUEST

    @app.route("/api/strategies")
    def strategies() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the strategy names in comparison order."""
        return jsonify({"strategies": [str(strategy) for strategy in Strategy]})

    @app.route("/api/allocation", methods=["POST"])
    def allocation() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Run the requested allocation strategies and pick the best.

        Expects JSON body: ``{"blocks": ..., "processes": ...,
        "algorithms": [...]}`` where ``algorithms`` is optional.

        Returns:
            JSON with ``results`` per strategy and ``best``.

        """
        data = _json_body()
        if "blocks" not in data or "processes" not in data:
            msg = "Missing 'blocks' or 'processes' field"
            raise InvalidInputError(msg)
        blocks = coerce_numbers(data["blocks"], field="blocks")
        processes = coerce_numbers(data["processes"], field="processes")
        algorithms = data.get("algorithms")
        if algorithms is not None and not isinstance(algorithms, list):
            msg = "'algorithms' must be a list of strategy names"
            raise InvalidInputError(msg)

        report = run_comparison(blocks, processes, algorithms)
        ran = ", ".join(str(strategy) for strategy in report.ran()) or "none"
        logger.log(
            LogLevel.INFO,
            f"{len(blocks)} blocks, {len(processes)} processes; ran {ran}; best {report.best}",
            source="allocation",
        )
        return jsonify(report.to_dict())

    @app.route("/api/page-replacement", methods=["POST"])
    def page_replacement() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Replay a reference string with FIFO.

        Expects JSON body: ``{"pages": ..., "frames": n}``; either field
        may be omitted to use the configured default.

        Returns:
            JSON with totals, rates, and the per-step trace.

        """
        data = _json_body()
        pages = coerce_numbers(data.get("pages", list(settings.default_pages)), field="pages")
        frames = data.get("frames", settings.default_frames)
        if not isinstance(frames, int) or isinstance(frames, bool):
            msg = f"'frames' must be an integer, got {frames!r}"
            raise InvalidInputError(msg)
        if not settings.frames_in_range(frames):
            msg = f"'frames' must be between {settings.min_frames} and {settings.max_frames}"
            raise InvalidInputError(msg)

        result = fifo_page_replacement(pages, frames)
        logger.log(
            LogLevel.INFO,
            f"FIFO {len(pages)} references, {frames} frames: "
            f"{result.page_faults} faults, {result.page_hits} hits",
            source="paging",
        )
        return jsonify(result.to_dict())

    @app.route("/api/log")
    def log() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the audit log, optionally filtered by ``?level=NAME``."""
        level_name = request.args.get("level")
        min_level: LogLevel | None = None
        if level_name is not None:
            try:
                min_level = LogLevel[level_name.upper()]
            except KeyError:
                msg = f"Unknown log level: {level_name!r}"
                raise InvalidInputError(msg) from None
        entries = logger.filter(min_level=min_level)
        return jsonify(
            {
                "entries": [
                    {"level": entry.level.name, "source": entry.source, "message": entry.message}
                    for entry in entries
                ]
            }
        )

    return app


def main() -> None:
    """Run the web API development server.

    This is the ``py-memsim-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
