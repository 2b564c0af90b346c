"""Attendance: anonymous "I'm going" marks against a club's session date."""
from datetime import datetime

from .base import db


class Attendance(db.Model):
    __tablename__ = 'attendance'

    id = db.Column(db.Integer, primary_key=True)
    club_id = db.Column(db.Integer, db.ForeignKey('clubs.id'), nullable=True, index=True)
    club_name = db.Column(db.String(200), nullable=False, index=True)
    session_date = db.Column(db.Date, nullable=False)
    visitor_id = db.Column(db.String(100), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Attendance {self.club_name} {self.session_date}>'
