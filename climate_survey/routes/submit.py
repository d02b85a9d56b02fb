from flask import Blueprint, current_app, jsonify, request

from ..ingest.identity import client_hash
from ..ingest.pipeline import record_submission
from ..tasks import enqueue_forward

bp = Blueprint("submit", __name__)


@bp.post("/submit")
def submit():
    cfg = current_app.config
    survey_id = cfg["SURVEY_ID"]
    ip_hash = client_hash(request.remote_addr or "", cfg["SALT"], cfg["IP_WHITELIST"])

    # non-JSON bodies come through as None and fail validation
    payload = request.get_json(silent=True)
    stored = record_submission(survey_id, ip_hash, payload)

    enqueue_forward(survey_id, payload, stored["submitted_at"])
    return jsonify({"ok": True})
