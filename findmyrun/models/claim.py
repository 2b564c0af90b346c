"""ClubClaim model: a request to become a club's owner."""
from datetime import datetime

from .base import db
from ..constants import ClaimStatus


class ClubClaim(db.Model):
    __tablename__ = 'club_claims'

    id = db.Column(db.Integer, primary_key=True)
    club_id = db.Column(db.Integer, db.ForeignKey('clubs.id'), nullable=False, index=True)
    claimant_email = db.Column(db.String(255), nullable=False)
    claimant_name = db.Column(db.String(200), nullable=True)
    verification_method = db.Column(db.String(20), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=ClaimStatus.PENDING, index=True)
    instagram_code = db.Column(db.String(10), nullable=True)
    rejected_reason = db.Column(db.Text, nullable=True)
    token_expires_at = db.Column(db.DateTime, nullable=True)
    verified_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @classmethod
    def pending_for_club(cls, club_id):
        return cls.query.filter_by(club_id=club_id, status=ClaimStatus.PENDING).first()

    @classmethod
    def transition(cls, claim_id, new_status, **values):
        """
        Conditionally move a pending claim to ``new_status``.

        Extra column values (``verified_at``, ``rejected_reason``) are written
        in the same statement. Returns True if this call made the change.
        """
        values['status'] = new_status
        updated = cls.query.filter_by(id=claim_id, status=ClaimStatus.PENDING).update(values)
        return updated == 1

    def __repr__(self):
        return f'<ClubClaim {self.id}: club={self.club_id} {self.status}>'

    def to_status_dict(self):
        """Public view returned by the claim status lookup."""
        return {
            'id': self.id,
            'status': self.status,
            'verification_method': self.verification_method,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'verified_at': self.verified_at.isoformat() if self.verified_at else None,
            'clubs': {'id': self.club.id, 'name': self.club.name} if self.club else None,
        }

    def to_dict(self):
        club = self.club
        return {
            'id': self.id,
            'club_id': self.club_id,
            'claimant_email': self.claimant_email,
            'claimant_name': self.claimant_name,
            'verification_method': self.verification_method,
            'status': self.status,
            'instagram_code': self.instagram_code,
            'rejected_reason': self.rejected_reason,
            'token_expires_at': self.token_expires_at.isoformat() if self.token_expires_at else None,
            'verified_at': self.verified_at.isoformat() if self.verified_at else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'clubs': {
                'id': club.id,
                'name': club.name,
                'city': club.city,
                'area': club.area,
                'instagram': club.instagram,
            } if club else None,
        }
