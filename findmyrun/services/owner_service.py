from flask import current_app

from .. import db
from ..constants import OWNER_EDITABLE_FIELDS, PACE_CHOICES, TERRAIN_CHOICES
from ..errors import AuthorizationError, NotFoundError, ValidationError
from ..models import Club
from . import notifier, session_store
from .claim_service import normalize_email
from .submission_service import is_truthy

BOOLEAN_FIELDS = ('beginner_friendly', 'dog_friendly', 'female_only')

LOGIN_REQUESTED_MESSAGE = 'If you own any clubs, you will receive a login link shortly.'
NOT_OWNED_MESSAGE = 'Club not found or you do not have permission to edit it'


class OwnerService:
    """Owner login and the owner's view of their clubs."""

    @staticmethod
    def request_login(email):
        """
        Email a one-hour login link to an owner.

        The reply is the same whether or not ``email`` owns anything. A mail
        failure here is raised (DependencyFailure) since nothing else has
        happened yet.
        """
        email = normalize_email(email)
        if not email:
            raise ValidationError('Email is required')

        if not Club.query.filter(db.func.lower(Club.owner_email) == email).first():
            current_app.logger.info('Login requested for an address with no clubs')
            return LOGIN_REQUESTED_MESSAGE

        secret = session_store.create_login_challenge(email)
        notifier.notify_owner_login(email, secret)
        current_app.logger.info(f"Login link sent to {email}")
        return LOGIN_REQUESTED_MESSAGE

    @staticmethod
    def redeem_login(email, secret):
        """Returns the cookie value for a new session, or None."""
        email = normalize_email(email)
        session_secret = session_store.redeem_login_challenge(email, secret)
        if not session_secret:
            return None
        current_app.logger.info(f"Owner session started for {email}")
        return session_store.build_cookie(email, session_secret)

    @staticmethod
    def logout(cookie_value):
        session_store.revoke_session(cookie_value)

    @staticmethod
    def list_owned_clubs(owner_email):
        clubs = Club.query.filter(
            db.func.lower(Club.owner_email) == owner_email.lower()
        ).order_by(Club.name).all()
        return clubs

    @staticmethod
    def get_owned_club(club_id, owner_email):
        """The club, if ``owner_email`` owns it right now."""
        club = db.session.get(Club, club_id)
        if not club:
            raise NotFoundError(NOT_OWNED_MESSAGE)
        if not club.is_owned_by(owner_email):
            raise AuthorizationError(NOT_OWNED_MESSAGE)
        return club

    @staticmethod
    def edit_club(club_id, owner_email, body):
        """
        Apply an owner's edits. Keys outside OWNER_EDITABLE_FIELDS are
        ignored; ownership is checked again before writing.
        """
        club = OwnerService.get_owned_club(club_id, owner_email)

        updates = {field: body[field] for field in OWNER_EDITABLE_FIELDS if field in body}
        if not updates:
            raise ValidationError('No valid fields to update')
        if 'name' in updates and not str(updates['name'] or '').strip():
            raise ValidationError('Invalid value for field: name')
        if 'pace' in updates and updates['pace'] not in PACE_CHOICES:
            raise ValidationError('Invalid value for field: pace')
        if updates.get('terrain') and updates['terrain'] not in TERRAIN_CHOICES:
            raise ValidationError('Invalid value for field: terrain')

        for field in BOOLEAN_FIELDS:
            if field in updates:
                updates[field] = is_truthy(updates[field])

        try:
            for field, value in updates.items():
                setattr(club, field, value)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"Club {club.id} updated by owner ({', '.join(sorted(updates))})")
        return club
