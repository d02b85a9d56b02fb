# climate_survey/reporting/summary.py
"""
Fold stored survey payloads into the admin summary.

Every payload is a flat ``{question_key: scalar}`` mapping. Scale questions
(1-5) get a response count, a running sum, a per-score histogram and an
average; free-text questions (``*_free``) collect their trimmed answers.
A bad value only drops that one answer, never the whole pass.
"""
import logging
import math
import re
from typing import Iterable, Optional, Union

from sqlalchemy.exc import SQLAlchemyError

from ..errors import StorageUnavailableError
from ..extensions import db
from ..ingest.validation import scalar_text
from ..models import Submission
from .keys import parse_question_key

logger = logging.getLogger(__name__)

SCALE_MIN = 1
SCALE_MAX = 5

# plain ASCII decimal, as the form submits it (no "1_0", no non-Latin digits)
_DECIMAL = re.compile(r"^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")

Number = Union[int, float]


def _whole(x: Number) -> Number:
    if isinstance(x, float) and x.is_integer():
        return int(x)
    return x


def coerce_score(value) -> Optional[Number]:
    """Return the value as a 1-5 score, or None when it cannot count."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if not _DECIMAL.match(text):
            return None
        number = float(text)
    else:
        return None

    if not math.isfinite(number) or not SCALE_MIN <= number <= SCALE_MAX:
        return None
    return _whole(number)


def summarize_submissions(survey_id: str, payloads: Iterable, group_free_text: bool = False) -> dict:
    questions = {}
    free_text = {}
    total = 0

    for payload in payloads:
        total += 1
        if not isinstance(payload, dict):
            continue

        for key, value in payload.items():
            parsed = parse_question_key(key)

            if parsed.is_free_text:
                text = scalar_text(value).strip() if value is not None else ""
                if not text:
                    continue
                if group_free_text:
                    by_building = free_text.setdefault(parsed.question_id, {})
                    by_building.setdefault(parsed.building, []).append(text)
                else:
                    free_text.setdefault(key, []).append(text)
                continue

            stats = questions.setdefault(key, {
                "key": key,
                "type": "scale",
                "responses": 0,
                "sum": 0,
                "counts": {},
                "average": None,
            })
            score = coerce_score(value)
            if score is None:
                continue
            stats["responses"] += 1
            stats["sum"] += score
            bucket = int(math.floor(score))
            stats["counts"][bucket] = stats["counts"].get(bucket, 0) + 1

    for stats in questions.values():
        stats["sum"] = _whole(stats["sum"])
        if stats["responses"]:
            stats["average"] = _whole(stats["sum"] / stats["responses"])

    return {
        "surveyId": survey_id,
        "totalSubmissions": total,
        "questions": questions,
        "freeText": free_text,
    }


def load_summary(survey_id: str, group_free_text: bool = False) -> dict:
    """Read every stored payload for the survey and summarise it."""
    try:
        q = db.session.query(Submission.payload).filter(Submission.survey_id == survey_id)
        payloads = [payload for (payload,) in q]
    except SQLAlchemyError:
        logger.exception("Summary read error")
        raise StorageUnavailableError()

    logger.info("Summarising %d submissions for %s", len(payloads), survey_id)
    return summarize_submissions(survey_id, payloads, group_free_text=group_free_text)
