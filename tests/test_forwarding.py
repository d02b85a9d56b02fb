"""
Tests for forwarding accepted submissions to the optional webhook.
Celery runs eagerly under the testing config, so the task executes inline.
"""

import pytest
import requests

from climate_survey import tasks


class FakeResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


@pytest.fixture
def webhook(app):
    app.config["FORWARD_WEBHOOK_URL"] = "https://hooks.example.test/survey"
    return app.config["FORWARD_WEBHOOK_URL"]


def test_no_webhook_no_forward(submit_from, monkeypatch):
    calls = []
    monkeypatch.setattr(tasks.requests, "post", lambda *a, **kw: calls.append(a))
    assert submit_from({"q_a": 1}).status_code == 200
    assert calls == []


def test_accepted_submission_forwarded(submit_from, webhook, monkeypatch):
    calls = []

    def fake_post(url, json=None, timeout=None):
        calls.append((url, json, timeout))
        return FakeResponse()

    monkeypatch.setattr(tasks.requests, "post", fake_post)
    assert submit_from({"safety_child_safe": 4}).status_code == 200

    assert len(calls) == 1
    url, body, timeout = calls[0]
    assert url == webhook
    assert body["surveyId"] == "test_survey"
    assert body["payload"] == {"safety_child_safe": 4}
    assert "submittedAt" in body
    assert timeout == 10


def test_duplicate_is_not_forwarded(submit_from, webhook, monkeypatch):
    calls = []
    monkeypatch.setattr(tasks.requests, "post", lambda *a, **kw: calls.append(a) or FakeResponse())
    submit_from({"q_a": 1})
    submit_from({"q_a": 1})
    assert len(calls) == 1


def test_webhook_down_does_not_affect_submit(submit_from, webhook, monkeypatch):
    def fake_post(*args, **kwargs):
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(tasks.requests, "post", fake_post)
    response = submit_from({"q_a": 1})
    assert response.status_code == 200
    assert response.json == {"ok": True}


def test_webhook_error_status_does_not_affect_submit(submit_from, webhook, monkeypatch):
    monkeypatch.setattr(tasks.requests, "post", lambda *a, **kw: FakeResponse(502))
    assert submit_from({"q_a": 1}).status_code == 200


def test_broker_down_does_not_affect_submit(submit_from, webhook, monkeypatch):
    class Unqueueable:
        def delay(self, *args, **kwargs):
            raise ConnectionRefusedError("broker unreachable")

    monkeypatch.setattr(tasks, "forward_submission", Unqueueable())
    assert submit_from({"q_a": 1}).status_code == 200


def test_task_returns_false_on_failure(app, monkeypatch):
    def fake_post(*args, **kwargs):
        raise requests.Timeout("slow")

    monkeypatch.setattr(tasks.requests, "post", fake_post)
    with app.app_context():
        assert tasks.forward_submission.run("https://hooks.example.test", {"surveyId": "s"}) is False
