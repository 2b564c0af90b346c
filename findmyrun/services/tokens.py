"""
Magic-link tokens and owner-session secrets.

An action token is ``base64url("<issued_ms>.<subject_id>.<action>.<sig>")``
where ``sig`` is the first 16 hex characters of an HMAC-SHA256 over the
first three fields, keyed with ``ADMIN_SECRET``. Tokens are not stored;
they are checked on every use.
"""
import hashlib
import hmac
import secrets
import time
from collections import namedtuple

from flask import current_app
from itsdangerous.encoding import base64_decode, base64_encode, want_bytes
from itsdangerous.exc import BadData
from itsdangerous.signer import HMACAlgorithm

from ..constants import INSTAGRAM_CODE_ALPHABET, INSTAGRAM_CODE_LENGTH, SIGNATURE_LENGTH
from ..errors import TokenError

TokenVerification = namedtuple('TokenVerification', ['valid', 'error'])

FORMAT_ERROR = 'Invalid token format'
ID_MISMATCH = 'Invalid token: ID mismatch'
ACTION_MISMATCH = 'Invalid token: action mismatch'
SIGNATURE_MISMATCH = 'Invalid token: signature mismatch'
EXPIRED = 'Token expired'

_MS_PER_DAY = 24 * 60 * 60 * 1000
_hmac = HMACAlgorithm(hashlib.sha256)


def _secret():
    return want_bytes(current_app.config['ADMIN_SECRET'])


def _sign(payload):
    return _hmac.get_signature(_secret(), want_bytes(payload)).hex()[:SIGNATURE_LENGTH]


def _default_expiry_days():
    return current_app.config.get('TOKEN_EXPIRY_DAYS', 7)


def generate_token(subject_id, action, issued_at=None):
    """
    Build a signed token for ``action`` on ``subject_id``.

    ``issued_at`` is a millisecond epoch timestamp; it defaults to now.
    """
    if issued_at is None:
        issued_at = int(time.time() * 1000)
    payload = f'{issued_at}.{subject_id}.{action}'
    return base64_encode(f'{payload}.{_sign(payload)}').decode('ascii')


def verify_token(token, expected_subject_id, expected_action, expiry_days=None):
    """
    Check a token against the subject and action it must authorize.

    Checks run in a fixed order (subject, action, signature, age) and the
    first failure is reported, so callers can tell a stale link from a
    forged or misrouted one.
    """
    if expiry_days is None:
        expiry_days = _default_expiry_days()

    try:
        decoded = base64_decode(token).decode('utf-8')
        # Only the canonical encoding is accepted
        if base64_encode(decoded).decode('ascii') != token:
            return TokenVerification(False, FORMAT_ERROR)
    except (BadData, UnicodeDecodeError, TypeError, ValueError):
        return TokenVerification(False, FORMAT_ERROR)

    parts = decoded.split('.')
    if len(parts) != 4:
        return TokenVerification(False, FORMAT_ERROR)
    issued_at, subject_id, action, signature = parts

    if subject_id != str(expected_subject_id):
        return TokenVerification(False, ID_MISMATCH)

    if action != expected_action:
        return TokenVerification(False, ACTION_MISMATCH)

    expected_signature = _sign(f'{issued_at}.{subject_id}.{action}')
    if not hmac.compare_digest(want_bytes(signature), want_bytes(expected_signature)):
        return TokenVerification(False, SIGNATURE_MISMATCH)

    try:
        age_ms = int(time.time() * 1000) - int(issued_at)
    except ValueError:
        return TokenVerification(False, FORMAT_ERROR)
    if age_ms > expiry_days * _MS_PER_DAY:
        return TokenVerification(False, EXPIRED)

    return TokenVerification(True, None)


def require_valid_token(token, expected_subject_id, expected_action, expiry_days=None):
    """Like ``verify_token`` but raises ``TokenError`` carrying the reason."""
    if not token:
        raise TokenError('Missing token')
    result = verify_token(token, expected_subject_id, expected_action, expiry_days)
    if not result.valid:
        raise TokenError(result.error)


def generate_random_code(length=INSTAGRAM_CODE_LENGTH):
    """Short uppercase code a human can type into a direct message."""
    return ''.join(secrets.choice(INSTAGRAM_CODE_ALPHABET) for _ in range(length))


def generate_session_secret():
    return secrets.token_urlsafe(32)


def hash_secret(secret):
    """One-way digest stored in place of a session secret."""
    return hashlib.sha256(want_bytes(secret)).hexdigest()
