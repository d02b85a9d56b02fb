import logging

from flask import Blueprint, current_app, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db

bp = Blueprint("health", __name__)
logger = logging.getLogger(__name__)


@bp.get("/health")
def health():
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check DB error")
        db.session.rollback()
        return jsonify({"ok": False, "error": "db_unreachable"}), 500
    return jsonify({"ok": True, "surveyId": current_app.config["SURVEY_ID"]})
