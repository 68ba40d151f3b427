"""
History API routes
==================

Endpoints used by scan hosts to store results and read them back:

- GET  /health
- POST /api/users       register (or look up) a user by email
- POST /api/scan        store one scan result
- GET  /api/history     most recent scans for a user
- POST /api/export      render a stored scan as a report
- GET  /api/download/N  the same report as a file download
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from flask import Blueprint, Response, current_app, g, jsonify, request

from gdprscan.errors import StorageError
from gdprscan.modules.history import HistoryManager
from gdprscan.modules.report import REPORT_FORMATS, ReportConfig, render_report

logger = logging.getLogger(__name__)

api_blueprint = Blueprint("api", __name__)

DOWNLOAD_TYPES = {
    "text": ("text/plain", "txt"),
    "html": ("text/html", "html"),
    "json": ("application/json", "json"),
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_history() -> HistoryManager:
    """Per-request history manager, closed on teardown."""
    if "history" not in g:
        g.history = HistoryManager(current_app.config["GDPRSCAN_DB_PATH"])
    return g.history


@api_blueprint.teardown_app_request
def _close_history(exc):
    history = g.pop("history", None)
    if history is not None:
        history.close()


def _error(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def _parse_int(value, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"'{name}' must be an integer") from exc


def _report_format(value) -> str:
    report_format = str(value or "text").lower()
    if report_format not in REPORT_FORMATS:
        raise ValueError(f"Unsupported format: {report_format}")
    return report_format


# =============================================================================
# ROUTES
# =============================================================================

@api_blueprint.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok", "timestamp": datetime.now(UTC).isoformat()})


@api_blueprint.route("/api/users", methods=["POST"])
def register_user():
    data = request.get_json(silent=True) or {}
    email = str(data.get("email") or "").strip()
    if not email:
        return _error("'email' is required", 400)
    try:
        user = get_history().get_or_create_user(email)
    except StorageError as exc:
        logger.error("User registration failed: %s", exc)
        return _error(str(exc), 500)
    return jsonify({"success": True, "userId": user.id, "tier": user.tier})


@api_blueprint.route("/api/scan", methods=["POST"])
def store_scan():
    data = request.get_json(silent=True) or {}
    url = data.get("url")
    if not url:
        return _error("'url' is required", 400)

    try:
        user_id = _parse_int(data.get("userId"), "userId")
        scan_id = get_history().store_scan(user_id, url, data)
    except ValueError as exc:
        return _error(str(exc), 400)
    except StorageError as exc:
        logger.error("Scan error: %s", exc)
        return _error(str(exc), 500)

    return jsonify({"success": True, "scanId": scan_id, "message": "Scan results stored"})


@api_blueprint.route("/api/history", methods=["GET"])
def scan_history():
    try:
        user_id = _parse_int(request.args.get("userId"), "userId")
        limit = _parse_int(request.args.get("limit", current_app.config["GDPRSCAN_HISTORY_LIMIT"]), "limit")
    except ValueError as exc:
        return _error(str(exc), 400)

    scans = get_history().get_history(user_id, limit=max(1, limit))
    return jsonify({"scans": scans})


@api_blueprint.route("/api/export", methods=["POST"])
def export_scan():
    data = request.get_json(silent=True) or {}
    try:
        scan_id = _parse_int(data.get("scanId"), "scanId")
        user_id = _parse_int(data.get("userId"), "userId")
        report_format = _report_format(data.get("format"))
    except ValueError as exc:
        return _error(str(exc), 400)

    scan = get_history().get_scan(scan_id, user_id=user_id)
    if scan is None:
        return jsonify({"error": "Scan not found"}), 404

    report = render_report(scan, ReportConfig(format=report_format))
    return jsonify(
        {
            "success": True,
            "report": report,
            "downloadUrl": f"/api/download/{scan_id}?userId={user_id}&format={report_format}",
        }
    )


@api_blueprint.route("/api/download/<int:scan_id>", methods=["GET"])
def download_report(scan_id: int):
    try:
        user_id = _parse_int(request.args.get("userId"), "userId")
        report_format = _report_format(request.args.get("format"))
    except ValueError as exc:
        return _error(str(exc), 400)

    scan = get_history().get_scan(scan_id, user_id=user_id)
    if scan is None:
        return jsonify({"error": "Scan not found"}), 404

    mimetype, extension = DOWNLOAD_TYPES[report_format]
    return Response(
        render_report(scan, ReportConfig(format=report_format)),
        mimetype=mimetype,
        headers={"Content-Disposition": f"attachment; filename=gdpr_report_{scan_id}.{extension}"},
    )
