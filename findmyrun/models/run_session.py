"""Weekly run session belonging to a club."""
from datetime import datetime

from .base import db


class RunSession(db.Model):
    __tablename__ = 'sessions'

    id = db.Column(db.Integer, primary_key=True)
    club_id = db.Column(db.Integer, db.ForeignKey('clubs.id'), nullable=True, index=True)
    # Sessions are matched to clubs by name as well, seed data has no ids
    club_name = db.Column(db.String(200), nullable=False, index=True)
    day = db.Column(db.String(20), nullable=False)
    time = db.Column(db.String(20), nullable=False)
    distance = db.Column(db.String(50), nullable=True)
    meeting_point = db.Column(db.Text, nullable=True)
    session_type = db.Column(db.String(30), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<RunSession {self.club_name} {self.day} {self.time}>'

    def to_dict(self):
        return {
            'id': self.id,
            'club_id': self.club_id,
            'club_name': self.club_name,
            'day': self.day,
            'time': self.time,
            'distance': self.distance,
            'meeting_point': self.meeting_point,
            'session_type': self.session_type,
        }
