import os
from dotenv import load_dotenv
load_dotenv()


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


def _env_list(name):
    return [v.strip() for v in os.getenv(name, "").split(",") if v.strip()]


def _database_uri(default):
    uri = os.getenv("DATABASE_URL")
    if not uri:
        return default
    # SQLAlchemy 1.4+ no longer accepts the Heroku/Render style scheme
    if uri.startswith("postgres://"):
        uri = uri.replace("postgres://", "postgresql://", 1)
    return uri


class Config:
    """Base configuration class"""

    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")

    SQLALCHEMY_DATABASE_URI = _database_uri("sqlite:///climate_survey.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # Survey
    SURVEY_ID = os.getenv("SURVEY_ID", "royhart_parent_family_climate_2025")
    SALT = os.getenv("SALT", "CHANGE_ME_SALT")
    ADMIN_TOKEN = os.getenv("ADMIN_TOKEN", "")
    IP_WHITELIST = _env_list("IP_WHITELIST")

    # Request handling
    TRUST_PROXY = _env_flag("TRUST_PROXY", True)
    PROXY_HOPS = int(os.getenv("PROXY_HOPS", 1))
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", 1024 * 1024))
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

    # Optional webhook (e.g. a Google Apps Script sheet)
    FORWARD_WEBHOOK_URL = os.getenv("FORWARD_WEBHOOK_URL") or os.getenv("APPS_SCRIPT_URL", "")
    FORWARD_TIMEOUT = float(os.getenv("FORWARD_TIMEOUT", 10))

    # Celery configuration for background tasks
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379")
    CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", REDIS_URL)
    CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", REDIS_URL)
    CELERY_TASK_ALWAYS_EAGER = _env_flag("CELERY_TASK_ALWAYS_EAGER", False)

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}

    SURVEY_ID = "test_survey"
    SALT = "test-salt"
    ADMIN_TOKEN = "test-token"
    IP_WHITELIST = ["10.0.0.99"]
    TRUST_PROXY = False
    FORWARD_WEBHOOK_URL = ""

    CELERY_BROKER_URL = "memory://"
    CELERY_RESULT_BACKEND = "cache+memory://"
    CELERY_TASK_ALWAYS_EAGER = True


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
