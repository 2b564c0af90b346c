class SubmissionStatus:
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'


class ClaimStatus:
    PENDING = 'pending'
    VERIFIED = 'verified'
    REJECTED = 'rejected'


class VerificationMethod:
    EMAIL = 'email'
    INSTAGRAM = 'instagram'

    ALL = (EMAIL, INSTAGRAM)


class TokenAction:
    """Actions bound into magic-link tokens."""
    APPROVE = 'approve'
    REJECT = 'reject'
    CLAIM_VERIFY = 'claim-verify'
    CLAIM_APPROVE = 'claim-approve'
    CLAIM_REJECT = 'claim-reject'


class NotificationKind:
    SUBMISSION_PENDING = 'submission-awaiting-moderation'
    SUBMISSION_APPROVED = 'submission-approved'
    SUBMISSION_REJECTED = 'submission-rejected'
    CLAIM_VERIFICATION_LINK = 'claim-verification-link'
    CLAIM_ADMIN_NOTIFICATION = 'claim-admin-notification'
    CLAIM_APPROVED = 'claim-approved'
    CLAIM_REJECTED = 'claim-rejected'
    OWNER_LOGIN_LINK = 'owner-login-link'


PACE_CHOICES = ('slow', 'mixed', 'fast')
TERRAIN_CHOICES = ('road', 'trail', 'mixed')
DEFAULT_PACE = 'mixed'

PACE_LABELS = {
    'slow': 'Relaxed / Social',
    'mixed': 'Mixed abilities',
    'fast': 'Fast / Training',
}

SESSION_TYPE_LABELS = {
    '': 'Regular run',
    'social': 'Social run',
    'long': 'Long run',
    'track': 'Track session',
    'intervals': 'Intervals / Speed',
    'tempo': 'Tempo run',
    'trail': 'Trail run',
}

# Honeypot form field; real visitors never see it
HONEYPOT_FIELD = 'website_url'

SUBMISSION_REQUIRED_FIELDS = ['club_name', 'city', 'area', 'day', 'time', 'meeting_point', 'contact_email']

# Fields a club owner may change through the owner edit endpoint
OWNER_EDITABLE_FIELDS = [
    'name',
    'area',
    'day',
    'time',
    'distance',
    'meeting_point',
    'description',
    'pace',
    'terrain',
    'beginner_friendly',
    'dog_friendly',
    'female_only',
    'post_run',
    'instagram',
    'website',
    'contact_email',
]

INSTAGRAM_CODE_LENGTH = 6
INSTAGRAM_CODE_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
SIGNATURE_LENGTH = 16
