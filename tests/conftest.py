"""
Shared fixtures: a fresh app on an in-memory SQLite database per test,
with Celery running tasks eagerly.
"""

import pytest

from climate_survey import create_app
from climate_survey.extensions import db


@pytest.fixture
def app():
    app = create_app("testing")
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    """Test client so the API can be called without running a server"""
    return app.test_client()


@pytest.fixture
def admin_token(app):
    return app.config["ADMIN_TOKEN"]


@pytest.fixture
def submit_from(client):
    """POST a payload to /submit as if it came from the given address"""
    def _submit(payload, address="192.0.2.10", **kwargs):
        return client.post("/submit", json=payload,
                           environ_base={"REMOTE_ADDR": address}, **kwargs)
    return _submit
