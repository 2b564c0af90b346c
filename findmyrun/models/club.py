"""Club model: a published listing."""
from datetime import datetime

from .base import db
from ..constants import SubmissionStatus, DEFAULT_PACE


class Club(db.Model):
    __tablename__ = 'clubs'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    city = db.Column(db.String(100), nullable=False, index=True)
    area = db.Column(db.String(100), nullable=True)
    lat = db.Column(db.Float, nullable=True)
    lng = db.Column(db.Float, nullable=True)
    day = db.Column(db.String(20), nullable=True)
    time = db.Column(db.String(20), nullable=True)
    distance = db.Column(db.String(50), nullable=True)
    meeting_point = db.Column(db.Text, nullable=True)
    description = db.Column(db.Text, nullable=True)
    pace = db.Column(db.String(10), nullable=False, default=DEFAULT_PACE)
    terrain = db.Column(db.String(10), nullable=True)
    beginner_friendly = db.Column(db.Boolean, nullable=False, default=False)
    dog_friendly = db.Column(db.Boolean, nullable=False, default=False)
    female_only = db.Column(db.Boolean, nullable=False, default=False)
    post_run = db.Column(db.String(255), nullable=True)
    instagram = db.Column(db.String(100), nullable=True)
    website = db.Column(db.String(255), nullable=True)
    contact_email = db.Column(db.String(255), nullable=True)
    # Editorial trust badge, set by the site operator only
    verified = db.Column(db.Boolean, nullable=False, default=False)
    status = db.Column(db.String(20), nullable=False, default=SubmissionStatus.APPROVED)
    owner_email = db.Column(db.String(255), nullable=True, index=True)
    owner_name = db.Column(db.String(200), nullable=True)
    claimed_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    sessions = db.relationship(
        'RunSession',
        backref='club',
        cascade='all, delete-orphan',
        order_by='RunSession.id'
    )
    attendance = db.relationship(
        'Attendance',
        backref='club',
        cascade='all, delete-orphan',
        lazy='dynamic'
    )
    claims = db.relationship(
        'ClubClaim',
        backref='club',
        cascade='all, delete-orphan',
        lazy='dynamic',
        order_by='ClubClaim.created_at.desc()'
    )

    @property
    def is_claimed(self):
        return bool(self.owner_email)

    def is_owned_by(self, email):
        if not self.owner_email or not email:
            return False
        return self.owner_email.lower() == email.lower()

    def assign_owner(self, email, name=None):
        self.owner_email = email
        self.owner_name = name
        self.claimed_at = datetime.utcnow()

    def __repr__(self):
        return f'<Club {self.id}: {self.name}>'

    def to_summary_dict(self):
        """Short form used by the owner dashboard."""
        return {
            'id': self.id,
            'name': self.name,
            'city': self.city,
            'area': self.area,
            'day': self.day,
            'time': self.time,
            'status': self.status,
            'claimed_at': self.claimed_at.isoformat() if self.claimed_at else None,
        }

    def to_dict(self, include_sessions=False):
        """Convert club to dictionary for JSON serialization."""
        data = {
            'id': self.id,
            'name': self.name,
            'city': self.city,
            'area': self.area,
            'lat': self.lat,
            'lng': self.lng,
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
            'contact_email': self.contact_email,
            'verified': self.verified,
            'status': self.status,
            'owner_email': self.owner_email,
            'owner_name': self.owner_name,
            'claimed_at': self.claimed_at.isoformat() if self.claimed_at else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }
        if include_sessions:
            data['sessions'] = [s.to_dict() for s in self.sessions]
        return data
