# climate_survey/ingest/pipeline.py
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import DuplicateSubmissionError, StorageUnavailableError
from ..extensions import db
from ..models import Submission, utcnow
from .validation import validate_payload

logger = logging.getLogger(__name__)


def record_submission(survey_id: str, ip_hash: str, payload) -> dict:
    """
    Validate and store one submission.
    The (survey_id, ip_hash) unique constraint is the only duplicate check;
    a violation comes back as DuplicateSubmissionError, not a server error.
    """
    validate_payload(payload)

    # captured before commit: the row is expired afterwards
    submitted_at = utcnow()
    submission = Submission(survey_id=survey_id, ip_hash=ip_hash,
                            submitted_at=submitted_at, payload=payload)
    db.session.add(submission)
    try:
        db.session.flush()
        submission_id = submission.id
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        logger.info("Duplicate submission rejected for survey %s", survey_id)
        raise DuplicateSubmissionError()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Submit error")
        raise StorageUnavailableError()

    logger.info("Stored submission %s (%d fields)", submission_id, len(payload))
    return {"id": submission_id, "submitted_at": submitted_at}


def reset_submissions() -> int:
    """Delete every stored submission for every survey. Irreversible."""
    try:
        deleted = db.session.query(Submission).delete(synchronize_session=False)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Reset error")
        raise StorageUnavailableError()

    logger.warning("All submissions cleared (%d rows)", deleted)
    return deleted
