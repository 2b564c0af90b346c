"""
Owner session records.

Two kinds of row share the ``owner_sessions`` table: a one-hour login
challenge that is deleted when redeemed, and the seven-day session created
in its place. The cookie value is ``"<email>:<secret>"``; only
``hash_secret(secret)`` is ever written to the database.
"""
from datetime import datetime

from flask import current_app

from .. import db
from ..models import OwnerSession
from .tokens import generate_session_secret, hash_secret

COOKIE_DELIMITER = ':'


def _store(email, ttl):
    secret = generate_session_secret()
    db.session.add(OwnerSession(
        owner_email=email,
        token_hash=hash_secret(secret),
        expires_at=datetime.utcnow() + ttl
    ))
    db.session.commit()
    return secret


def parse_cookie(cookie_value):
    """Split a cookie on the first delimiter; None if it is malformed."""
    if not cookie_value or COOKIE_DELIMITER not in cookie_value:
        return None
    email, secret = cookie_value.split(COOKIE_DELIMITER, 1)
    if not email or not secret:
        return None
    return email, secret


def build_cookie(email, secret):
    return f'{email}{COOKIE_DELIMITER}{secret}'


def create_login_challenge(email):
    """Persist a login challenge for ``email`` and return the raw secret."""
    return _store(email, current_app.config['LOGIN_LINK_TTL'])


def redeem_login_challenge(email, secret):
    """
    Exchange a login challenge for a session secret.

    The challenge row is deleted before the session row is written so a
    login link works once. Returns None for an unknown or expired link.
    """
    if not email or not secret:
        return None
    challenge = OwnerSession.find_active(email, hash_secret(secret))
    if not challenge:
        return None

    db.session.delete(challenge)
    db.session.commit()
    return _store(email, current_app.config['OWNER_SESSION_TTL'])


def verify_session(cookie_value):
    """Return the owner email for a live session cookie, else None."""
    parsed = parse_cookie(cookie_value)
    if not parsed:
        return None
    email, secret = parsed
    session_row = OwnerSession.find_active(email, hash_secret(secret))
    return session_row.owner_email if session_row else None


def revoke_session(cookie_value):
    parsed = parse_cookie(cookie_value)
    if not parsed:
        return
    email, secret = parsed
    OwnerSession.query.filter_by(owner_email=email, token_hash=hash_secret(secret)).delete(
        synchronize_session=False
    )
    db.session.commit()
