"""
Outgoing email.

``send(kind, recipient, data)`` renders one of the plain-text templates
below and hands it to Flask-Mail. Any transport failure is raised as
``DependencyFailure``; callers decide whether that matters (see
``best_effort``).
"""
from flask import current_app, url_for
from flask_mail import Message

from .. import mail
from ..constants import NotificationKind, PACE_LABELS, SESSION_TYPE_LABELS
from ..errors import DependencyFailure


def _session_lines(sessions):
    lines = []
    for session in sessions:
        line = f"  - {session.get('day')}s at {session.get('time')}"
        session_type = session.get('type') or ''
        if session_type:
            line += f" ({SESSION_TYPE_LABELS.get(session_type, session_type)})"
        if session.get('distance'):
            line += f", {session['distance']}"
        lines.append(line)
    return '\n'.join(lines)


def _features(data):
    features = [
        label for flag, label in (
            ('beginner_friendly', 'Beginner friendly'),
            ('dog_friendly', 'Dog friendly'),
            ('female_only', 'Women only'),
        ) if data.get(flag)
    ]
    return ', '.join(features) or 'None specified'


def _submission_pending(data):
    sessions = data.get('sessions') or [
        {'day': data.get('day'), 'time': data.get('time'), 'distance': data.get('distance')}
    ]
    subject = f"New Club Submission: {data['name']}"
    body = f'''A new club has been submitted to Find My Run.

{data['name']}
{data['area']}, {data['city']}

Sessions ({len(sessions)}):
{_session_lines(sessions)}

Pace: {PACE_LABELS.get(data.get('pace'), data.get('pace'))}
Meeting point: {data['meeting_point']}
Description: {data.get('description') or 'No description provided'}
Features: {_features(data)}
Post-run: {data.get('post_run') or '-'}
Instagram: {data.get('instagram') or '-'}
Website: {data.get('website') or '-'}

Submitted by: {data.get('submitter_name') or 'Not provided'} <{data['submitter_email']}>

Approve: {data['approve_url']}
Reject: {data['reject_url']}

These links expire after {current_app.config['TOKEN_EXPIRY_DAYS']} days.
'''
    return subject, body


def _submission_approved(data):
    subject = f"{data['club_name']} is now live on Find My Run!"
    body = f'''Good news! {data['club_name']} has been approved and is now listed on Find My Run.

See it here: {data['site_url']}

Thanks for helping runners find their crew.
'''
    return subject, body


def _submission_rejected(data):
    subject = f"Update on your submission: {data['club_name']}"
    reason = f"\nReason: {data['reason']}\n" if data.get('reason') else ''
    body = f'''Thanks for submitting {data['club_name']} to Find My Run. We are not able to list it right now.
{reason}
You are welcome to send an updated submission at any time.
'''
    return subject, body


def _claim_verification_link(data):
    subject = f"Verify your ownership of {data['club_name']}"
    body = f'''Someone has asked to manage the listing for {data['club_name']} on Find My Run.

If this was you, or someone you trust at the club, confirm the claim here:
{data['verify_url']}

The link expires after {current_app.config['TOKEN_EXPIRY_DAYS']} days. If you did not expect this email you can ignore it.
'''
    return subject, body


def _claim_admin_notification(data):
    subject = f"Club Claim: {data['club_name']} via {data['verification_method']}"
    code_line = f"Verification code: {data['instagram_code']}\n" if data.get('instagram_code') else ''
    body = f'''A new ownership claim needs review.

Club: {data['club_name']}
Claimant: {data.get('claimant_name') or 'Not provided'} <{data['claimant_email']}>
Method: {data['verification_method']}
{code_line}
Check that the club's Instagram account sent the code in a direct message before approving.

Approve: {data['approve_url']}
Reject: {data['reject_url']}
'''
    return subject, body


def _claim_approved(data):
    subject = f"You now own {data['club_name']} on Find My Run!"
    body = f'''Your claim for {data['club_name']} has been approved.

Manage your listing from the owner dashboard: {data['dashboard_url']}
'''
    return subject, body


def _claim_rejected(data):
    subject = f"Update on your claim for {data['club_name']}"
    reason = f"\nReason: {data['reason']}\n" if data.get('reason') else ''
    body = f'''We were unable to verify your claim for {data['club_name']}.
{reason}
If you think this is a mistake, reply to this email and we will take another look.
'''
    return subject, body


def _owner_login_link(data):
    subject = 'Your login link for Find My Run'
    body = f'''Use the link below to sign in to your club dashboard:

{data['login_url']}

The link works once and expires in one hour.
'''
    return subject, body


TEMPLATES = {
    NotificationKind.SUBMISSION_PENDING: _submission_pending,
    NotificationKind.SUBMISSION_APPROVED: _submission_approved,
    NotificationKind.SUBMISSION_REJECTED: _submission_rejected,
    NotificationKind.CLAIM_VERIFICATION_LINK: _claim_verification_link,
    NotificationKind.CLAIM_ADMIN_NOTIFICATION: _claim_admin_notification,
    NotificationKind.CLAIM_APPROVED: _claim_approved,
    NotificationKind.CLAIM_REJECTED: _claim_rejected,
    NotificationKind.OWNER_LOGIN_LINK: _owner_login_link,
}


def send(kind, recipient, data):
    """Render template ``kind`` with ``data`` and email it to ``recipient``."""
    if kind not in TEMPLATES:
        raise ValueError(f'Unknown notification kind: {kind}')
    if not recipient:
        raise DependencyFailure(f'No recipient configured for {kind}')

    subject, body = TEMPLATES[kind](data)
    msg = Message(subject,
                  sender=current_app.config['MAIL_DEFAULT_SENDER'],
                  recipients=[recipient],
                  body=body)
    try:
        mail.send(msg)
    except Exception as e:
        current_app.logger.error(f"Error sending {kind} email to {recipient}: {e}")
        raise DependencyFailure(f'Failed to send {kind} email') from e


def best_effort(notify, *args, **kwargs):
    """
    Run a notify helper, logging instead of raising on failure.

    Returns True when the email was handed to the transport.
    """
    try:
        notify(*args, **kwargs)
        return True
    except DependencyFailure as e:
        name = getattr(notify, '__name__', repr(notify))
        current_app.logger.error(f"Notification skipped ({name}): {e}")
        return False


def _admin_email():
    return current_app.config.get('ADMIN_EMAIL')


# Helpers, one per template kind

def notify_submission_pending(submission, approve_token, reject_token):
    data = submission.to_dict()
    data['approve_url'] = url_for('submissions_bp.approve_submission', submission_id=submission.id,
                                  token=approve_token, _external=True)
    data['reject_url'] = url_for('submissions_bp.reject_submission', submission_id=submission.id,
                                 token=reject_token, _external=True)
    send(NotificationKind.SUBMISSION_PENDING, _admin_email(), data)


def notify_submission_approved(submission):
    send(NotificationKind.SUBMISSION_APPROVED, submission.submitter_email, {
        'club_name': submission.name,
        'site_url': current_app.config['APP_URL'],
    })


def notify_submission_rejected(submission, reason=None):
    send(NotificationKind.SUBMISSION_REJECTED, submission.submitter_email, {
        'club_name': submission.name,
        'reason': reason,
    })


def notify_claim_verification(club, claim, verify_token):
    send(NotificationKind.CLAIM_VERIFICATION_LINK, club.contact_email, {
        'club_name': club.name,
        'verify_url': url_for('claims_bp.verify_claim', claim_id=claim.id,
                              token=verify_token, _external=True),
    })


def notify_claim_admin(club, claim, approve_token, reject_token):
    send(NotificationKind.CLAIM_ADMIN_NOTIFICATION, _admin_email(), {
        'club_name': club.name,
        'claimant_email': claim.claimant_email,
        'claimant_name': claim.claimant_name,
        'verification_method': claim.verification_method,
        'instagram_code': claim.instagram_code,
        'approve_url': url_for('claims_bp.admin_approve_claim', claim_id=claim.id,
                               token=approve_token, _external=True),
        'reject_url': url_for('claims_bp.admin_reject_claim', claim_id=claim.id,
                              token=reject_token, _external=True),
    })


def notify_claim_approved(claim, club_name):
    send(NotificationKind.CLAIM_APPROVED, claim.claimant_email, {
        'club_name': club_name,
        'dashboard_url': f"{current_app.config['APP_URL']}/owner",
    })


def notify_claim_rejected(claim, club_name, reason=None):
    send(NotificationKind.CLAIM_REJECTED, claim.claimant_email, {
        'club_name': club_name,
        'reason': reason,
    })


def notify_owner_login(email, secret):
    send(NotificationKind.OWNER_LOGIN_LINK, email, {
        'login_url': url_for('owner_bp.redeem_login', email=email, token=secret, _external=True),
    })
