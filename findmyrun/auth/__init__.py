from .utils import (
    SharedSecretAuth,
    TokenAuth,
    admin_required,
    authorize_transition,
    owner_session_required,
)

__all__ = [
    'SharedSecretAuth',
    'TokenAuth',
    'admin_required',
    'authorize_transition',
    'owner_session_required',
]
