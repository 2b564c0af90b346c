import hmac
from functools import wraps

from flask import current_app, g, request
from itsdangerous.encoding import want_bytes

from ..errors import AuthorizationError, TokenError
from ..services import session_store
from ..services.tokens import verify_token


def _secret_matches(candidate):
    secret = current_app.config.get('ADMIN_SECRET')
    if not secret or not candidate:
        return False
    return hmac.compare_digest(want_bytes(candidate), want_bytes(secret))


class SharedSecretAuth:
    """The raw admin secret, as sent by buttons in the admin console."""

    def check(self, credential, subject_id):
        return _secret_matches(credential), None


class TokenAuth:
    """A signed magic-link token for one action on one subject."""

    def __init__(self, action):
        self.action = action

    def check(self, credential, subject_id):
        result = verify_token(credential, subject_id, self.action)
        return result.valid, result.error


def authorize_transition(credential, subject_id, action):
    """
    Accept either the admin secret or a valid token for ``action``.

    Variants are tried in order and the first match wins. When none match,
    the token's own failure reason is raised as a TokenError.
    """
    if not credential:
        raise TokenError('Missing token')

    reason = None
    for variant in (SharedSecretAuth(), TokenAuth(action)):
        ok, error = variant.check(credential, subject_id)
        if ok:
            return variant
        reason = error or reason
    raise TokenError(reason or 'Invalid token')


def admin_required(f):
    """
    Decorator for the admin API: requires ``Authorization: Bearer <ADMIN_SECRET>``.

    Usage:
        @admin_bp.route('/api/admin/clubs')
        @admin_required
        def list_clubs():
            ...
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        header = request.headers.get('Authorization', '')
        if not header.startswith('Bearer ') or not _secret_matches(header[len('Bearer '):]):
            raise AuthorizationError()
        return f(*args, **kwargs)
    return decorated_function


def owner_session_required(f):
    """
    Decorator for owner data endpoints. Puts the session's email on
    ``g.owner_email``; a missing or stale cookie is a 401.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        cookie = request.cookies.get(current_app.config['OWNER_SESSION_COOKIE'])
        owner_email = session_store.verify_session(cookie)
        if not owner_email:
            raise AuthorizationError()
        g.owner_email = owner_email
        return f(*args, **kwargs)
    return decorated_function
