import logging
from datetime import datetime, timezone

import requests
from celery import shared_task
from flask import current_app

logger = logging.getLogger(__name__)


@shared_task(ignore_result=True)
def forward_submission(url, body):
    """
    Background task: POST an accepted submission to the external webhook.
    Failures are logged and dropped; the submitter already got their answer.
    """
    timeout = current_app.config.get("FORWARD_TIMEOUT", 10)
    try:
        resp = requests.post(url, json=body, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        logger.warning(f"Webhook forward failed: {e}")
        return False
    logger.info(f"Forwarded submission for {body.get('surveyId')} ({resp.status_code})")
    return True


def enqueue_forward(survey_id, payload, submitted_at=None):
    """Queue the webhook forward if one is configured. Never raises."""
    url = current_app.config.get("FORWARD_WEBHOOK_URL")
    if not url:
        return False

    submitted_at = submitted_at or datetime.now(timezone.utc)
    body = {
        "surveyId": survey_id,
        "payload": payload,
        "submittedAt": submitted_at.isoformat(),
    }
    try:
        forward_submission.delay(url, body)
    except Exception as e:
        # broker unreachable; ingestion must not notice
        logger.warning(f"Could not queue webhook forward: {e}")
        return False
    return True
