import hmac
import logging
from datetime import datetime
from functools import wraps

from flask import Blueprint, current_app, jsonify, request, send_file

from ..errors import AdminTokenError
from ..ingest.pipeline import reset_submissions
from ..reporting.export import export_csv
from ..reporting.sections import build_free_text_rows, build_sections
from ..reporting.summary import load_summary

bp = Blueprint("admin", __name__)
logger = logging.getLogger(__name__)


def require_admin_token(view):
    """Shared-secret gate: ?token=... or an X-Admin-Token header"""
    @wraps(view)
    def wrapper(*args, **kwargs):
        expected = current_app.config.get("ADMIN_TOKEN") or ""
        given = request.args.get("token") or request.headers.get("X-Admin-Token") or ""
        if not expected:
            logger.warning("ADMIN_TOKEN is not configured; admin endpoints are disabled")
            raise AdminTokenError()
        if not hmac.compare_digest(given.encode("utf-8"), expected.encode("utf-8")):
            raise AdminTokenError()
        return view(*args, **kwargs)
    return wrapper


@bp.get("/summary")
@require_admin_token
def summary():
    group_free_text = request.args.get("groupFreeText") == "building"
    data = load_summary(current_app.config["SURVEY_ID"], group_free_text=group_free_text)
    return jsonify({
        "ok": True,
        "summary": data,
        "sections": build_sections(data),
        "freeTextRows": build_free_text_rows(data),
    })


@bp.route("/reset", methods=["GET", "POST"])
@require_admin_token
def reset():
    deleted = reset_submissions()
    return jsonify({"ok": True, "deleted": deleted})


@bp.get("/export.csv")
@require_admin_token
def export():
    survey_id = current_app.config["SURVEY_ID"]
    output = export_csv(survey_id)
    if output is None:
        return jsonify({"error": "no_data"}), 404

    filename = f"{survey_id}_export_{datetime.now().strftime('%Y%m%d')}.csv"
    return send_file(output, mimetype="text/csv", as_attachment=True, download_name=filename)
