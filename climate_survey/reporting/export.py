import logging
from io import BytesIO
from typing import Optional

import pandas as pd
from sqlalchemy.exc import SQLAlchemyError

from ..errors import StorageUnavailableError
from ..extensions import db
from ..models import Submission

logger = logging.getLogger(__name__)

# leading characters a spreadsheet reads as the start of a formula
FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")


def _neutralise_formula(value):
    if isinstance(value, str) and value.startswith(FORMULA_PREFIXES):
        return "'" + value
    return value


def submissions_frame(survey_id: str) -> pd.DataFrame:
    """One row per submission: id, submitted_at, then one column per question key."""
    try:
        rows = db.session.query(Submission.id, Submission.submitted_at, Submission.payload) \
            .filter(Submission.survey_id == survey_id) \
            .order_by(Submission.submitted_at, Submission.id) \
            .all()
    except SQLAlchemyError:
        logger.exception("Export read error")
        raise StorageUnavailableError()

    records = []
    for sub_id, submitted_at, payload in rows:
        row = {"id": sub_id, "submitted_at": submitted_at.isoformat() if submitted_at else None}
        if isinstance(payload, dict):
            row.update({k: v for k, v in payload.items() if k not in ("id", "submitted_at")})
        records.append(row)

    # object dtype keeps answers as submitted (no int -> float upcast around gaps)
    df = pd.DataFrame(records, dtype=object)
    if df.empty:
        return df
    answer_cols = sorted(c for c in df.columns if c not in ("id", "submitted_at"))
    return df[["id", "submitted_at"] + answer_cols]


def export_csv(survey_id: str) -> Optional[BytesIO]:
    """CSV bytes of the survey's submissions, or None when there is nothing to export."""
    df = submissions_frame(survey_id)
    if df.empty:
        return None
    df = df.map(_neutralise_formula)
    df.columns = [_neutralise_formula(c) for c in df.columns]
    output = BytesIO()
    df.to_csv(output, index=False, encoding="utf-8")
    output.seek(0)
    return output
