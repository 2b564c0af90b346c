"""
Club ownership claims.

A claim is verified either by a link sent to the club's contact email or,
for the Instagram route, by the admin after matching a DM'd code. Either way
the verified claim's claimant becomes the club's single owner.
"""
from datetime import datetime, timedelta

from flask import current_app

from .. import db
from ..auth import authorize_transition
from ..constants import ClaimStatus, TokenAction, VerificationMethod
from ..errors import AlreadyProcessedError, ConflictError, NotFoundError, ValidationError
from ..models import Club, ClubClaim
from . import notifier
from .tokens import generate_random_code, generate_token, require_valid_token


def normalize_email(email):
    return (email or '').strip().lower()


class ClaimService:
    @staticmethod
    def create_claim(club_id, claimant_email, claimant_name=None, method=None):
        """
        Open a pending claim on an unowned club and send the proof request.

        Raises ValidationError, NotFoundError or ConflictError before
        anything is stored.
        """
        claimant_email = normalize_email(claimant_email)
        if not club_id or not claimant_email or not method:
            raise ValidationError('Missing required fields: clubId, claimantEmail, verificationMethod')
        if method not in VerificationMethod.ALL:
            raise ValidationError('Invalid verification method. Must be "email" or "instagram"')

        club = db.session.get(Club, club_id)
        if not club:
            raise NotFoundError('Club not found')
        if club.is_claimed:
            raise ConflictError('This club has already been claimed')
        if ClubClaim.pending_for_club(club.id):
            raise ConflictError('There is already a pending claim for this club')
        if method == VerificationMethod.EMAIL and not club.contact_email:
            raise ValidationError('This club has no contact email on file. Please use Instagram verification.')

        expiry_days = current_app.config['TOKEN_EXPIRY_DAYS']
        claim = ClubClaim(
            club_id=club.id,
            claimant_email=claimant_email,
            claimant_name=(claimant_name or '').strip() or None,
            verification_method=method,
            status=ClaimStatus.PENDING,
            instagram_code=generate_random_code() if method == VerificationMethod.INSTAGRAM else None,
            token_expires_at=datetime.utcnow() + timedelta(days=expiry_days)
        )
        try:
            db.session.add(claim)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"Claim {claim.id} opened on club {club.id} via {method}")

        if method == VerificationMethod.EMAIL:
            # Proof is control of the club's own inbox, not the claimant's
            notifier.best_effort(
                notifier.notify_claim_verification,
                club, claim, generate_token(claim.id, TokenAction.CLAIM_VERIFY)
            )
        else:
            notifier.best_effort(
                notifier.notify_claim_admin,
                club, claim,
                generate_token(claim.id, TokenAction.CLAIM_APPROVE),
                generate_token(claim.id, TokenAction.CLAIM_REJECT)
            )
        return claim

    @staticmethod
    def _get_claim(claim_id):
        claim = db.session.get(ClubClaim, claim_id)
        if not claim:
            raise NotFoundError('Claim not found')
        return claim

    @staticmethod
    def _grant_ownership(claim):
        """Verify the claim and hand the club to the claimant in one commit."""
        if not ClubClaim.transition(claim.id, ClaimStatus.VERIFIED, verified_at=datetime.utcnow()):
            db.session.rollback()
            db.session.refresh(claim)
            raise AlreadyProcessedError(claim.status)

        club = claim.club
        if club.is_claimed and not club.is_owned_by(claim.claimant_email):
            db.session.rollback()
            raise ConflictError('This club has already been claimed')

        try:
            club.assign_owner(claim.claimant_email, claim.claimant_name)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"Club {club.id} now owned by {claim.claimant_email} (claim {claim.id})")
        notifier.best_effort(notifier.notify_claim_approved, claim, club.name)
        return club

    @staticmethod
    def verify_by_link(claim_id, token):
        """Self-service path: the club's contact inbox clicked the link."""
        require_valid_token(token, claim_id, TokenAction.CLAIM_VERIFY)
        claim = ClaimService._get_claim(claim_id)
        if claim.status != ClaimStatus.PENDING:
            raise AlreadyProcessedError(claim.status)
        return ClaimService._grant_ownership(claim)

    @staticmethod
    def admin_approve(claim_id, credential):
        """Admin decision; ``credential`` is a claim-approve token or the admin secret."""
        authorize_transition(credential, claim_id, TokenAction.CLAIM_APPROVE)
        claim = ClaimService._get_claim(claim_id)
        if claim.status == ClaimStatus.VERIFIED:
            raise AlreadyProcessedError(claim.status)
        if claim.status == ClaimStatus.REJECTED:
            # Rejection is final
            raise ConflictError('claim_was_rejected')
        return ClaimService._grant_ownership(claim)

    @staticmethod
    def admin_reject(claim_id, credential, reason=None):
        authorize_transition(credential, claim_id, TokenAction.CLAIM_REJECT)
        claim = ClaimService._get_claim(claim_id)
        if claim.status != ClaimStatus.PENDING:
            raise AlreadyProcessedError(claim.status)

        reason = (reason or '').strip() or None
        if not ClubClaim.transition(claim.id, ClaimStatus.REJECTED, rejected_reason=reason):
            db.session.rollback()
            db.session.refresh(claim)
            raise AlreadyProcessedError(claim.status)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"Claim {claim.id} rejected")
        notifier.best_effort(notifier.notify_claim_rejected, claim, claim.club.name, reason)
        return claim

    @staticmethod
    def get_status(claim_id):
        if not claim_id:
            raise ValidationError('Claim ID required')
        return ClaimService._get_claim(claim_id)
