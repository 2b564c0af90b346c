"""Owner login links and owner sessions. Only token hashes are stored."""
from datetime import datetime

from .base import db


class OwnerSession(db.Model):
    __tablename__ = 'owner_sessions'

    id = db.Column(db.Integer, primary_key=True)
    owner_email = db.Column(db.String(255), nullable=False, index=True)
    token_hash = db.Column(db.String(64), nullable=False, index=True)
    expires_at = db.Column(db.DateTime, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @classmethod
    def find_active(cls, email, token_hash):
        """Unexpired row for ``(email, token_hash)``, or None."""
        return cls.query.filter(
            cls.owner_email == email,
            cls.token_hash == token_hash,
            cls.expires_at >= datetime.utcnow()
        ).first()

    @classmethod
    def purge_expired(cls):
        return cls.query.filter(cls.expires_at < datetime.utcnow()).delete(synchronize_session=False)

    def __repr__(self):
        return f'<OwnerSession {self.owner_email} until {self.expires_at}>'
