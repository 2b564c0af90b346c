"""
Operator tools behind the admin bearer secret: listings, deletes, the
verified badge and the seed import.
"""
import json
import os

from flask import current_app

from .. import db
from ..constants import DEFAULT_PACE, SubmissionStatus
from ..errors import NotFoundError, ValidationError
from ..models import Attendance, Club, ClubClaim, RunSession, Submission

# Columns copied from a seed record onto a Club
SEED_FIELDS = [
    'name', 'city', 'area', 'lat', 'lng', 'day', 'time', 'distance',
    'meeting_point', 'description', 'pace', 'terrain', 'beginner_friendly',
    'dog_friendly', 'female_only', 'post_run', 'instagram', 'website',
    'contact_email', 'verified',
]


class AdminService:
    @staticmethod
    def list_clubs():
        return Club.query.order_by(Club.created_at.desc()).all()

    @staticmethod
    def delete_club(club_id=None, name=None):
        """
        Delete a club by id or by name, with its sessions, attendance and
        claims. Rows linked only by club name are removed as well.
        """
        if not club_id and not name:
            raise ValidationError('Club ID or name required')

        if club_id:
            club = db.session.get(Club, club_id)
        else:
            club = Club.query.filter_by(name=name).first()
        if not club:
            raise NotFoundError('Club not found')

        club_id, club_name = club.id, club.name
        try:
            ClubClaim.query.filter_by(club_id=club_id).delete(synchronize_session=False)
            Attendance.query.filter(
                db.or_(Attendance.club_id == club_id, Attendance.club_name == club_name)
            ).delete(synchronize_session=False)
            db.session.delete(club)
            RunSession.query.filter_by(club_name=club_name).delete(synchronize_session=False)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        current_app.logger.info(f"Admin deleted club '{club_name}'")

    @staticmethod
    def set_verified(club_id, verified):
        club = db.session.get(Club, club_id)
        if not club:
            raise NotFoundError('Club not found')
        if not isinstance(verified, bool):
            raise ValidationError('Invalid value for field: verified')

        club.verified = verified
        db.session.commit()
        current_app.logger.info(f"Club {club.id} verified badge set to {verified}")
        return club

    @staticmethod
    def list_submissions():
        return Submission.query.order_by(Submission.created_at.desc()).all()

    @staticmethod
    def delete_submission(submission_id):
        if not submission_id:
            raise ValidationError('Submission ID required')
        deleted = Submission.query.filter_by(id=submission_id).delete()
        db.session.commit()
        if not deleted:
            raise NotFoundError('Submission not found')

    @staticmethod
    def list_claims():
        return ClubClaim.query.order_by(ClubClaim.created_at.desc()).all()

    @staticmethod
    def delete_claim(claim_id):
        if not claim_id:
            raise ValidationError('Claim ID required')
        deleted = ClubClaim.query.filter_by(id=claim_id).delete()
        db.session.commit()
        if not deleted:
            raise NotFoundError('Claim not found')


def load_seed_file(path=None):
    """Read seed clubs from a JSON list (or ``{"clubs": [...]}``)."""
    path = path or current_app.config['SEED_DATA_PATH']
    if not os.path.exists(path):
        raise NotFoundError(f'Seed file not found: {path}')
    with open(path, encoding='utf-8') as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get('clubs', [])
    if not isinstance(data, list):
        raise ValidationError('Seed file must contain a list of clubs')
    return data


def _club_from_seed(record):
    values = {field: record.get(field) for field in SEED_FIELDS if record.get(field) is not None}
    values.setdefault('pace', DEFAULT_PACE)
    values['status'] = SubmissionStatus.APPROVED
    club = Club(**values)
    for entry in record.get('sessions') or []:
        club.sessions.append(RunSession(
            club_name=club.name,
            day=entry.get('day'),
            time=entry.get('time'),
            distance=entry.get('distance'),
            meeting_point=entry.get('meeting_point') or club.meeting_point,
            session_type=entry.get('type')
        ))
    return club


def migrate_seed(records, batch_size=None):
    """
    Insert seed clubs whose name is not already listed.

    Inserts run in batches; a failed batch is rolled back and reported in
    ``errors`` without stopping the rest.
    """
    batch_size = batch_size or current_app.config.get('SEED_BATCH_SIZE', 20)
    existing = {name for (name,) in db.session.query(Club.name).all()}

    new_records, seen = [], set()
    for record in records:
        name = record.get('name')
        if not name or name in existing or name in seen:
            continue
        seen.add(name)
        new_records.append(record)

    migrated = 0
    errors = []
    for start in range(0, len(new_records), batch_size):
        batch = new_records[start:start + batch_size]
        try:
            db.session.add_all([_club_from_seed(record) for record in batch])
            db.session.commit()
            migrated += len(batch)
        except Exception as e:
            db.session.rollback()
            batch_no = start // batch_size + 1
            current_app.logger.error(f"Seed import batch {batch_no} failed: {e}")
            errors.append(f'Batch {batch_no}: {e}')

    skipped = len(records) - len(new_records)
    current_app.logger.info(f"Seed import: {migrated} migrated, {skipped} skipped, {len(errors)} failed batches")
    return {
        'success': not errors,
        'message': f'Migrated {migrated} clubs to database',
        'migrated': migrated,
        'skipped': skipped,
        'total': len(records),
        'errors': errors,
    }
