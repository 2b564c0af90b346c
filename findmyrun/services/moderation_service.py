from flask import current_app

from .. import db
from ..constants import SubmissionStatus, TokenAction, DEFAULT_PACE
from ..errors import AlreadyProcessedError, NotFoundError
from ..models import Club, RunSession, Submission
from . import locator, notifier
from .tokens import require_valid_token


class ModerationService:
    """
    Approve/reject transitions for submissions.

    Both are reached from emailed links, so a repeated click must report the
    current status instead of acting again.
    """

    @staticmethod
    def _load_pending(submission_id, token, action):
        require_valid_token(token, submission_id, action)

        submission = db.session.get(Submission, submission_id)
        if not submission:
            raise NotFoundError('Submission not found')
        if not submission.is_pending:
            raise AlreadyProcessedError(
                submission.status, f'This submission has already been {submission.status}'
            )
        return submission

    @staticmethod
    def _apply_transition(submission, new_status):
        """Conditional status update; losing a race counts as already processed."""
        if not Submission.transition(submission.id, new_status):
            db.session.rollback()
            db.session.refresh(submission)
            raise AlreadyProcessedError(
                submission.status, f'This submission has already been {submission.status}'
            )

    @staticmethod
    def _create_sessions(club, submission):
        """Store every submitted session. Failures are logged, the club stays."""
        if not submission.sessions:
            return 0
        try:
            for entry in submission.sessions:
                db.session.add(RunSession(
                    club_id=club.id,
                    club_name=club.name,
                    day=entry.get('day'),
                    time=entry.get('time'),
                    distance=entry.get('distance') or None,
                    meeting_point=submission.meeting_point,
                    session_type=entry.get('type') or None
                ))
            db.session.commit()
            return len(submission.sessions)
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f"Error creating sessions for club {club.id}: {e}")
            return 0

    @staticmethod
    def approve(submission_id, token):
        """
        Publish a pending submission as a Club.

        Returns the new Club. Raises TokenError, NotFoundError or
        AlreadyProcessedError before anything is written.
        """
        submission = ModerationService._load_pending(submission_id, token, TokenAction.APPROVE)

        location = locator.geocode(submission.meeting_point, submission.area, submission.city)
        primary = submission.primary_session

        club = Club(
            name=submission.name,
            city=submission.city,
            area=submission.area,
            lat=location.lat,
            lng=location.lng,
            day=primary.get('day') or submission.day,
            time=primary.get('time') or submission.time,
            distance=primary.get('distance') or submission.distance,
            meeting_point=submission.meeting_point,
            description=submission.description,
            pace=submission.pace or DEFAULT_PACE,
            terrain=submission.terrain,
            beginner_friendly=submission.beginner_friendly or False,
            dog_friendly=submission.dog_friendly or False,
            female_only=submission.female_only or False,
            post_run=submission.post_run,
            instagram=submission.instagram,
            website=submission.website,
            contact_email=submission.submitter_email,
            verified=False,
            status=SubmissionStatus.APPROVED
        )

        # Club and status change are committed together
        ModerationService._apply_transition(submission, SubmissionStatus.APPROVED)
        try:
            db.session.add(club)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(
            f"Submission {submission.id} approved as club {club.id} "
            f"({location.confidence} confidence location)"
        )

        ModerationService._create_sessions(club, submission)
        notifier.best_effort(notifier.notify_submission_approved, submission)
        return club

    @staticmethod
    def reject(submission_id, token, reason=None):
        """Mark a pending submission rejected and let the submitter know."""
        submission = ModerationService._load_pending(submission_id, token, TokenAction.REJECT)

        ModerationService._apply_transition(submission, SubmissionStatus.REJECTED)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"Submission {submission.id} rejected")
        notifier.best_effort(notifier.notify_submission_rejected, submission, reason)
        return submission
