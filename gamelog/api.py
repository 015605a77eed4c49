"""HTTP/JSON surface for the UI layer — one POST route per reader operation."""

import logging

from flask import Flask, jsonify, request

from gamelog.config import Config
from gamelog.reader import (
    LogReadError,
    get_line_count,
    get_log_metadata,
    read_log_lines_from,
    read_log_update,
)

logger = logging.getLogger(__name__)


class InvalidRequest(ValueError):
    """Raised for malformed request bodies."""


def _body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRequest("request body must be a JSON object")
    return data


def _path(data: dict) -> str:
    path = data.get("path")
    if not isinstance(path, str) or not path:
        raise InvalidRequest("'path' is required")
    return path


def _from_line(data: dict) -> int:
    from_line = data.get("fromLine", 0)
    # bool is an int subclass
    if isinstance(from_line, bool) or not isinstance(from_line, int) or from_line < 0:
        raise InvalidRequest("'fromLine' must be a non-negative integer")
    return from_line


def _flag(data: dict, name: str, default: bool) -> bool:
    value = data.get(name, default)
    if not isinstance(value, bool):
        raise InvalidRequest(f"'{name}' must be a boolean")
    return value


def create_app(config: Config | None = None) -> Flask:
    """Flask application factory."""
    app = Flask(__name__)
    config = config or Config()
    app.config["GAMELOG"] = config

    @app.errorhandler(InvalidRequest)
    def bad_request(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(LogReadError)
    def read_failed(e):
        logger.warning("Read failed: %s", e)
        return jsonify({"error": str(e)}), 500

    @app.route("/health")
    def health():
        return jsonify({"status": "healthy", "logFile": config.log_file})

    @app.route("/api/get_metadata", methods=["POST"])
    def get_metadata():
        data = _body()
        return jsonify(get_log_metadata(_path(data)).to_dict())

    @app.route("/api/read_suffix", methods=["POST"])
    def read_suffix():
        data = _body()
        return jsonify(read_log_lines_from(_path(data), _from_line(data)))

    @app.route("/api/get_line_count", methods=["POST"])
    def line_count():
        data = _body()
        return jsonify(get_line_count(_path(data)))

    @app.route("/api/read_update", methods=["POST"])
    def read_update():
        data = _body()
        update = read_log_update(
            _path(data),
            _from_line(data),
            extract_player_name=_flag(data, "extractPlayerName", True),
            extract_patterns=_flag(data, "extractPatterns", config.extract_patterns),
        )
        return jsonify(update.to_dict())

    return app
