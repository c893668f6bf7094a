#!/usr/bin/env python3
"""
Project Board Server
--------------------
Serves the board UI and a JSON API driving one in-memory Board.

Usage:
    python board_server.py
    python board_server.py --port 3000 --config projectboard.yaml

API:
    GET  /                         → Board UI (HTML)
    GET  /api/board                → JSON: { projects, lanes, stats }
    GET  /api/projects?status=     → JSON: { projects, count }
    POST /api/projects             → JSON body: { title, description, people }
    POST /api/lanes/<lane>/drop    → JSON body: { format, data }
    POST /api/drag                 → JSON body: { project_id, lane }
    GET  /health

The server runs single-threaded: every request's mutation and the
re-render it triggers finish before the next request starts.
"""

import argparse
import hmac
import json
import logging
from functools import wraps
from pathlib import Path
from typing import Optional

from flask import Flask, abort, jsonify, request

from projectboard.board import Board
from projectboard.config import BoardConfig, ConfigError, setup_logging
from projectboard.dnd import DataTransfer
from projectboard.schema import ProjectStatus

logger = logging.getLogger(__name__)

UI_FILE = Path(__file__).parent / "board_ui.html"


def _lane_or_404(lane: str) -> ProjectStatus:
    try:
        return ProjectStatus.from_str(lane)
    except ValueError:
        abort(404, f"Unknown lane: {lane}")


def create_app(config: Optional[BoardConfig] = None, board: Optional[Board] = None) -> Flask:
    config = config or BoardConfig()
    board = board or Board(config)

    app = Flask(__name__)
    app.config["BOARD"] = board

    # ── Auth ─────────────────────────────────────────────────────────────────

    def require_api_key(f):
        """Decorator: when a secret is configured, demand a matching X-API-Key."""
        @wraps(f)
        def decorated(*args, **kwargs):
            if not config.api_secret:
                return f(*args, **kwargs)
            provided = request.headers.get("X-API-Key", "").strip()
            if not hmac.compare_digest(provided, config.api_secret):
                code = 401 if not provided else 403
                return jsonify({"error": "Unauthorized"}), code
            return f(*args, **kwargs)
        return decorated

    def json_body() -> dict:
        data = request.get_json(force=True, silent=True)
        return data if isinstance(data, dict) else {}

    # ── Routes ───────────────────────────────────────────────────────────────

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": e.description}), 404

    @app.route("/")
    def index():
        if not UI_FILE.exists():
            abort(404, "board_ui.html not found. Place it alongside board_server.py")
        html = UI_FILE.read_text(encoding="utf-8")
        return html.replace("<!-- INJECT_BOARD -->", board.surface.to_html()).replace(
            "/* INJECT_API_KEY */",
            "const API_KEY = " + json.dumps(config.api_secret).replace("</", "<\\/") + ";",
        )

    @app.route("/api/board")
    def api_board():
        return jsonify({
            "projects": [p.to_dict() for p in board.state.projects],
            "lanes":    board.lane_contents(),
            "stats":    board.state.counts(),
        })

    @app.route("/api/projects", methods=["GET"])
    def api_projects():
        projects = board.state.projects
        status = request.args.get("status")
        if status:
            wanted = _lane_or_404(status)
            projects = tuple(p for p in projects if p.status == wanted)
        return jsonify({"projects": [p.to_dict() for p in projects], "count": len(projects)})

    @app.route("/api/projects", methods=["POST"])
    @require_api_key
    def api_create_project():
        """Submit the input form with the posted field values."""
        data = json_body()
        board.project_input.fill(
            title=data.get("title", ""),
            description=data.get("description", ""),
            people=data.get("people", ""),
        )
        project = board.project_input.submit()
        if project is None:
            message = board.surface.alerts[-1] if board.surface.alerts else "Invalid input"
            return jsonify({"error": message}), 400
        return jsonify({"project": project.to_dict(), "id": project.id}), 201

    @app.route("/api/lanes/<lane>/drop", methods=["POST"])
    @require_api_key
    def api_drop(lane):
        """Relay a browser drop: the raw transfer format and data."""
        status = _lane_or_404(lane)
        data = json_body()
        fmt = str(data.get("format", "")).strip()
        if not fmt:
            return jsonify({"error": "format is required"}), 400

        transfer = DataTransfer()
        transfer.set_data(fmt, data.get("data", ""))
        before = board.state.projects
        accepted = board.drop_transfer(status, transfer)
        moved = board.state.projects != before
        return jsonify({"accepted": accepted, "moved": moved, "lanes": board.lane_contents()})

    @app.route("/api/drag", methods=["POST"])
    @require_api_key
    def api_drag():
        """Drag a rendered card onto a lane."""
        data = json_body()
        project_id = str(data.get("project_id", "")).strip()
        lane = str(data.get("lane", "")).strip()
        if not project_id or not lane:
            return jsonify({"error": "project_id and lane are required"}), 400
        status = _lane_or_404(lane)

        before = board.state.projects
        dropped = board.drag_project(project_id, status)
        moved = board.state.projects != before
        return jsonify({"dropped": dropped, "moved": moved, "lanes": board.lane_contents()})

    @app.route("/health")
    def health():
        return jsonify({"status": "ok", "projects": board.state.counts()["total"]})

    return app


# ── Main ─────────────────────────────────────────────────────────────────────

def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Project Board Server")
    parser.add_argument("--host", help="Bind address (use 0.0.0.0 to expose on network)")
    parser.add_argument("--port", type=int)
    parser.add_argument("--config", help="Path to projectboard.yaml (overrides PROJECTBOARD_CONFIG)")
    args = parser.parse_args(argv)

    try:
        config = BoardConfig.load(args.config)
    except ConfigError as e:
        parser.error(str(e))
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port

    setup_logging(config.log_level)
    logger.info(f"Project board on http://{config.host}:{config.port}")

    app = create_app(config)
    app.run(host=config.host, port=config.port, debug=False, threaded=False)


if __name__ == "__main__":
    main()
