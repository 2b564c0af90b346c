"""Submission model: a club listing waiting for moderation."""
from datetime import datetime

from .base import db
from ..constants import SubmissionStatus, DEFAULT_PACE


class Submission(db.Model):
    __tablename__ = 'submissions'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    city = db.Column(db.String(100), nullable=False)
    area = db.Column(db.String(100), nullable=False)
    # Primary session, kept alongside the full list for older readers
    day = db.Column(db.String(20), nullable=False)
    time = db.Column(db.String(20), nullable=False)
    distance = db.Column(db.String(50), nullable=True)
    meeting_point = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=True)
    pace = db.Column(db.String(10), nullable=False, default=DEFAULT_PACE)
    terrain = db.Column(db.String(10), nullable=True)
    beginner_friendly = db.Column(db.Boolean, nullable=False, default=False)
    dog_friendly = db.Column(db.Boolean, nullable=False, default=False)
    female_only = db.Column(db.Boolean, nullable=False, default=False)
    post_run = db.Column(db.String(255), nullable=True)
    instagram = db.Column(db.String(100), nullable=True)
    website = db.Column(db.String(255), nullable=True)
    submitter_email = db.Column(db.String(255), nullable=False)
    submitter_name = db.Column(db.String(200), nullable=True)
    # [{"day": ..., "time": ..., "distance": ..., "type": ...}, ...]
    sessions = db.Column(db.JSON, nullable=False, default=list)
    status = db.Column(db.String(20), nullable=False, default=SubmissionStatus.PENDING, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def is_pending(self):
        return self.status == SubmissionStatus.PENDING

    @property
    def primary_session(self):
        """First listed session, falling back to the flat day/time columns."""
        if self.sessions:
            return self.sessions[0]
        return {'day': self.day, 'time': self.time, 'distance': self.distance}

    @classmethod
    def transition(cls, submission_id, new_status):
        """
        Move a pending submission to ``new_status``.

        The update is conditional on the row still being pending, so of two
        racing clicks only one wins. Returns True if this call made the change.
        """
        updated = cls.query.filter_by(id=submission_id, status=SubmissionStatus.PENDING).update({'status': new_status})
        return updated == 1

    def __repr__(self):
        return f'<Submission {self.id}: {self.name} ({self.status})>'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'city': self.city,
            'area': self.area,
            'day': self.day,
            'time': self.time,
            'distance': self.distance,
            'meeting_point': self.meeting_point,
            'description': self.description,
            'pace': self.pace,
            'terrain': self.terrain,
            'beginner_friendly': self.beginner_friendly,
            'dog_friendly': self.dog_friendly,
            'female_only': self.female_only,
            'post_run': self.post_run,
            'instagram': self.instagram,
            'website': self.website,
            'submitter_email': self.submitter_email,
            'submitter_name': self.submitter_name,
            'sessions': self.sessions or [],
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
