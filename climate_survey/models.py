from datetime import datetime, timezone

from sqlalchemy.dialects.postgresql import JSONB

from .extensions import db


def utcnow():
    return datetime.now(timezone.utc)


class Submission(db.Model):
    __tablename__ = "submissions"
    __table_args__ = (
        db.UniqueConstraint("survey_id", "ip_hash", name="uq_submissions_survey_ip"),
    )

    id = db.Column(db.Integer, primary_key=True)
    survey_id = db.Column(db.Text, nullable=False, index=True)
    ip_hash = db.Column(db.Text, nullable=False)
    submitted_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    payload = db.Column(db.JSON().with_variant(JSONB(), "postgresql"), nullable=False)

    def __repr__(self):
        return f"<Submission {self.id} survey={self.survey_id}>"
