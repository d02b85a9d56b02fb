# climate_survey/__init__.py
import logging
import os

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import config
from .errors import SurveyError
from .extensions import db, init_celery
from .routes.admin import bp as admin_bp
from .routes.health import bp as health_bp
from .routes.submit import bp as submit_bp

logger = logging.getLogger(__name__)


def _register_error_handlers(app):
    # every error leaves as JSON so the form and dashboard can read it
    @app.errorhandler(SurveyError)
    def _survey_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(404)
    def _404(e):
        return jsonify({"error": "not_found"}), 404

    @app.errorhandler(405)
    def _405(e):
        return jsonify({"error": "method_not_allowed"}), 405

    @app.errorhandler(413)
    def _413(e):
        return jsonify({"error": "payload_too_large"}), 413

    @app.errorhandler(500)
    def _500(e):
        return jsonify({"error": "server_error"}), 500


def create_app(config_name=None):
    config_name = config_name or os.getenv("FLASK_CONFIG", "default")
    settings = config[config_name]

    logging.basicConfig(level=settings.LOG_LEVEL)

    app = Flask(__name__)
    app.config.from_object(settings)
    app.url_map.strict_slashes = False

    if app.config["TRUST_PROXY"]:
        hops = app.config["PROXY_HOPS"]
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=hops, x_proto=hops)

    CORS(app, origins=app.config["CORS_ORIGINS"])
    db.init_app(app)
    init_celery(app)

    app.register_blueprint(submit_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(admin_bp, url_prefix="/admin")
    _register_error_handlers(app)

    @app.after_request
    def _access_log(resp):
        logger.info("%s %s %s", request.method, request.path, resp.status_code)
        return resp

    if not app.config["ADMIN_TOKEN"]:
        logger.warning("ADMIN_TOKEN is not set; admin endpoints will refuse every request")
    if config_name == "production" and app.config["SALT"] == "CHANGE_ME_SALT":
        logger.warning("SALT is still the default value; set SALT in the environment")

    with app.app_context():
        db.create_all()

    logger.info(f"Survey backend ready (survey {app.config['SURVEY_ID']}, config {config_name})")
    return app
