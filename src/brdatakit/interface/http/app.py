from __future__ import annotations

"""
HTTP Exposure Layer.

Flask application serving the data structure as JSON and the raw data
directory as static files, with CORS enabled for the frontend dev server.
"""

import logging
from typing import Any, Dict, Tuple

from flask import Flask, Response, jsonify, request, send_from_directory
from flask_cors import CORS

from brdatakit.core.services.structure_reader import read_data_structure

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# APPLICATION FACTORY
# -----------------------------------------------------------------------------

def create_app(config: Dict[str, Any]) -> Flask:
    """
    Build the Flask application for a validated configuration.

    Routes:
        GET /api/<structure_endpoint>   Data structure (legacy format, or
                                        tagged with ?format=tagged).
        GET /api/health                 Liveness probe.
        GET /<data_mount>/<path>        Static files from the data directory.

    Args:
        config: Validated configuration (see core.services.validator).

    Returns:
        Flask: The configured application.
    """
    data_dir: str = config["data_dir"]
    structure_endpoint: str = config["structure_endpoint"]
    data_mount: str = config["data_mount"]

    app = Flask("brdatakit")
    CORS(app)

    @app.get(f"/api/{structure_endpoint}")
    def data_structure() -> Response | Tuple[Response, int]:
        try:
            logger.info(f"Reading data structure from: {data_dir}")
            structure = read_data_structure(data_dir)
            if structure is None:
                logger.warning(f"Data directory not found: {data_dir}")
                return jsonify({})

            if request.args.get("format") == "tagged":
                return jsonify(structure.to_tagged_dict())

            payload = structure.to_dict()
            logger.debug(f"Structure read successfully, keys: {list(payload)}")
            return jsonify(payload)
        except Exception as e:
            logger.error(f"Error reading data structure: {e}", exc_info=True)
            return jsonify({"error": str(e)}), 500

    @app.get("/api/health")
    def health() -> Response:
        return jsonify({"ok": True})

    @app.get(f"/{data_mount}/<path:filename>")
    def data_file(filename: str) -> Response:
        return send_from_directory(data_dir, filename)

    return app


def run_server(config: Dict[str, Any]) -> None:
    """
    Serve the application with the Werkzeug development server.

    Blocks until interrupted.
    """
    app = create_app(config)
    host, port = config["host"], config["port"]

    logger.info(
        f"BR Data API server running at "
        f"http://localhost:{port}/api/{config['structure_endpoint']}"
    )
    logger.info(f"Server listening on {host}:{port}")
    app.run(host=host, port=port, debug=False, use_reloader=False)
