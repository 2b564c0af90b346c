from flask import current_app

from .. import db
from ..constants import (
    DEFAULT_PACE, HONEYPOT_FIELD, PACE_CHOICES, SUBMISSION_REQUIRED_FIELDS,
    SubmissionStatus, TERRAIN_CHOICES, TokenAction,
)
from ..errors import ValidationError
from ..models import Submission
from . import notifier
from .tokens import generate_token


def is_truthy(value):
    """Form checkboxes arrive as "yes" or as JSON booleans."""
    return value is True or value == 'yes'


def _clean(value):
    if isinstance(value, str):
        value = value.strip()
    return value or None


def normalize_sessions(body):
    """
    Collect the weekly sessions from a submission payload.

    Uses the ``sessions`` list when present, otherwise the flat
    day/time/distance fields. Entries without a day and time are dropped.
    """
    raw = body.get('sessions') or []
    if not isinstance(raw, list):
        raise ValidationError('Invalid value for field: sessions')

    sessions = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise ValidationError('Invalid value for field: sessions')
        day, time = _clean(entry.get('day')), _clean(entry.get('time'))
        if day and time:
            sessions.append({
                'day': day,
                'time': time,
                'distance': _clean(entry.get('distance')),
                'type': _clean(entry.get('type')),
            })

    if not sessions and _clean(body.get('day')) and _clean(body.get('time')):
        sessions.append({
            'day': _clean(body.get('day')),
            'time': _clean(body.get('time')),
            'distance': _clean(body.get('distance')),
            'type': None,
        })
    return sessions


class SubmissionService:
    @staticmethod
    def submit(body):
        """
        Validate and store a club submission, then tell the admin.

        Returns the new Submission, or None when the honeypot field is filled
        (the caller answers exactly as for a real submission). Raises
        ValidationError naming the first missing field.
        """
        if body.get(HONEYPOT_FIELD):
            current_app.logger.info('Honeypot field filled, discarding submission')
            return None

        sessions = normalize_sessions(body)
        primary = sessions[0] if sessions else {}
        values = dict(body)
        values['day'] = primary.get('day') or _clean(body.get('day'))
        values['time'] = primary.get('time') or _clean(body.get('time'))

        for field in SUBMISSION_REQUIRED_FIELDS:
            if not _clean(values.get(field)):
                raise ValidationError(f'Missing required field: {field}')

        pace = _clean(body.get('pace')) or DEFAULT_PACE
        if pace not in PACE_CHOICES:
            raise ValidationError('Invalid value for field: pace')
        terrain = _clean(body.get('terrain'))
        if terrain and terrain not in TERRAIN_CHOICES:
            raise ValidationError('Invalid value for field: terrain')

        submission = Submission(
            name=_clean(body['club_name']),
            city=_clean(body['city']),
            area=_clean(body['area']),
            day=primary['day'],
            time=primary['time'],
            distance=primary.get('distance'),
            meeting_point=_clean(body['meeting_point']),
            description=_clean(body.get('description')),
            pace=pace,
            terrain=terrain,
            beginner_friendly=is_truthy(body.get('beginner_friendly')),
            dog_friendly=is_truthy(body.get('dog_friendly')),
            female_only=is_truthy(body.get('female_only')),
            post_run=_clean(body.get('post_run')),
            instagram=_clean(body.get('instagram')),
            website=_clean(body.get('website')),
            submitter_email=_clean(body['contact_email']),
            submitter_name=_clean(body.get('submitter_name')),
            sessions=sessions,
            status=SubmissionStatus.PENDING
        )

        try:
            db.session.add(submission)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"Submission {submission.id} received for '{submission.name}'")

        # The row is already stored; the email is best effort
        notifier.best_effort(
            notifier.notify_submission_pending,
            submission,
            generate_token(submission.id, TokenAction.APPROVE),
            generate_token(submission.id, TokenAction.REJECT)
        )
        return submission
