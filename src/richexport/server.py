"""HTTP export service.

A small Flask application exposing every export target as a pure
request-to-response transform::

    POST /api/export/<target>   {"content": "<p>...</p>", "fileName": "notes", "title": "Notes"}
    GET  /api/health

Successful exports are returned as attachments with the target's content
type. Errors are JSON objects with a single ``error`` key.

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/richexport/server.py

import logging
from typing import Any, Optional
from urllib.parse import quote

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import RequestEntityTooLarge

from richexport.api import export, get_export_target
from richexport.config import ServiceConfig, load_config_from_env
from richexport.exceptions import EmptyInputError, RenderingError, UnsupportedTargetError, ValidationError
from richexport.logging_utils import configure_logging

logger = logging.getLogger(__name__)

NO_CONTENT_MESSAGE = "No content provided"


def _content_disposition(file_name: str) -> str:
    """Build an attachment header, adding an RFC 5987 name for non-ASCII file names."""
    ascii_name = file_name.encode("ascii", "ignore").decode("ascii").replace('"', "") or "document"
    disposition = f'attachment; filename="{ascii_name}"'
    if ascii_name != file_name:
        disposition += f"; filename*=UTF-8''{quote(file_name)}"
    return disposition


def _error(message: str, status: int) -> tuple[Response, int]:
    return jsonify({"error": message}), status


def create_app(config: Optional[ServiceConfig] = None) -> Flask:
    """Create the export service application.

    Parameters
    ----------
    config : ServiceConfig, optional
        Service configuration; loaded from the environment when omitted

    Returns
    -------
    Flask
        The configured application

    """
    config = config or load_config_from_env()

    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.max_content_bytes
    app.config["RICHEXPORT_CONFIG"] = config

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(error: RequestEntityTooLarge) -> tuple[Response, int]:
        return _error(f"Content exceeds the {config.max_content_bytes} byte limit", 413)

    @app.route("/api/health", methods=["GET"])
    def health() -> Response:
        return jsonify({"status": "ok"})

    @app.route("/api/export/<target>", methods=["POST"])
    def export_document(target: str) -> Any:
        try:
            export_target = get_export_target(target)
        except UnsupportedTargetError as e:
            return _error(str(e), 404)

        if request.content_length is not None and request.content_length > config.max_content_bytes:
            raise RequestEntityTooLarge()

        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return _error(NO_CONTENT_MESSAGE, 400)

        content = payload.get("content")
        file_name = payload.get("fileName") or config.default_file_name
        title = payload.get("title")
        if not isinstance(content, str):
            return _error(NO_CONTENT_MESSAGE, 400)
        if not isinstance(file_name, str) or (title is not None and not isinstance(title, str)):
            return _error("fileName and title must be strings", 400)

        try:
            result = export(content, export_target.name, file_name=file_name, title=title)
        except EmptyInputError:
            return _error(NO_CONTENT_MESSAGE, 400)
        except ValidationError as e:
            return _error(str(e), 400)
        except RenderingError:
            logger.exception(f"Export to {export_target.name} failed")
            return _error(f"Failed to generate {export_target.name.upper()}", 500)

        if result.lossy:
            logger.info(f"Export to {export_target.name} dropped styles: {', '.join(sorted(result.lost_styles))}")

        content_type = result.content_type
        if not export_target.is_binary:
            content_type += "; charset=utf-8"
        response = Response(result.to_bytes(), status=200, content_type=content_type)
        response.headers["Content-Disposition"] = _content_disposition(result.file_name)
        response.headers["X-Export-Lossy"] = "true" if result.lossy else "false"
        return response

    return app


def run_server(config: ServiceConfig, log_file: Optional[str] = None, trace_mode: bool = False) -> None:
    """Configure logging and serve the application until interrupted."""
    configure_logging(config.log_level, log_file=log_file, trace_mode=trace_mode)
    app = create_app(config)
    logger.info(f"Starting richexport service on http://{config.host}:{config.port}")
    app.run(host=config.host, port=config.port, debug=config.debug)
