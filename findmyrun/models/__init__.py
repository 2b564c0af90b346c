"""
Models package for Find My Run.

Each entity lives in its own module; everything is re-exported here so
callers can keep importing from ``findmyrun.models``.
"""
from .base import db

from .submission import Submission
from .club import Club
from .run_session import RunSession
from .claim import ClubClaim
from .owner_session import OwnerSession
from .attendance import Attendance

__all__ = [
    'db',
    'Submission',
    'Club',
    'RunSession',
    'ClubClaim',
    'OwnerSession',
    'Attendance',
]
