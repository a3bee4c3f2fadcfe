"""Report model definition."""

import uuid
from datetime import datetime

from storage.records import REPORT_CATEGORIES, REPORT_STATUSES, ReportRecord

from . import db


class Report(db.Model):
    """A waste issue filed by a citizen and reviewed by a verifier."""

    __tablename__ = "reports"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(
        db.String(36),
        db.ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    category = db.Column(
        db.Enum(*REPORT_CATEGORIES, name="report_category"),
        nullable=False,
    )
    location = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=True)
    status = db.Column(
        db.Enum(*REPORT_STATUSES, name="report_status"),
        nullable=False,
        default="pending",
        server_default=db.text("'pending'"),
    )
    points = db.Column(db.Integer, nullable=False, default=0, server_default=db.text("0"))
    verified_by = db.Column(db.String(36), db.ForeignKey("users.id"), nullable=True)
    created_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        server_default=db.func.now(),
    )

    owner = db.relationship("User", foreign_keys=[user_id])

    def __repr__(self) -> str:
        return f"<Report id={self.id} user_id={self.user_id} status={self.status}>"

    def to_record(self) -> ReportRecord:
        return ReportRecord(
            id=self.id,
            user_id=self.user_id,
            category=self.category,
            location=self.location,
            description=self.description,
            status=self.status,
            points=self.points or 0,
            verified_by=self.verified_by,
            created_at=self.created_at,
        )
