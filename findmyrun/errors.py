"""Error taxonomy shared by the services and the route layer.

Services raise these; the API blueprints let them propagate to the JSON
error handler registered in ``create_app``, while the magic-link routes
catch them and turn them into result-page redirects.
"""


class FindMyRunError(Exception):
    status_code = 500
    default_message = 'Server error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(FindMyRunError):
    status_code = 400
    default_message = 'Invalid request'


class AuthorizationError(FindMyRunError):
    status_code = 401
    default_message = 'Unauthorized'


class NotFoundError(FindMyRunError):
    status_code = 404
    default_message = 'Not found'


class ConflictError(FindMyRunError):
    status_code = 400
    default_message = 'Conflict'


class TokenError(FindMyRunError):
    """A magic-link token failed verification; ``message`` is the reason."""
    status_code = 400
    default_message = 'Invalid token'


class AlreadyProcessedError(FindMyRunError):
    """Replay of a finished transition. Informational, never a 500."""
    status_code = 200
    default_message = 'Already processed'

    def __init__(self, status, message=None):
        self.status = status
        super().__init__(message or f'Already {status}')


class DependencyFailure(FindMyRunError):
    """Notifier or locator failure."""
    status_code = 500
    default_message = 'External service failure'
