from flask import Blueprint, jsonify, request

from .constants import ClaimStatus, VerificationMethod
from .errors import AlreadyProcessedError, FindMyRunError, NotFoundError, TokenError
from .services.claim_service import ClaimService
from .utils import json_body, parse_int, result_redirect

claims_bp = Blueprint('claims_bp', __name__)


def _reason(error):
    """Short reason code for the result pages."""
    if isinstance(error, TokenError) and error.message == 'Missing token':
        return 'missing_token'
    if isinstance(error, NotFoundError):
        return 'claim_not_found'
    return error.message


@claims_bp.route('/api/claims', methods=['POST'])
def create_claim():
    body = json_body()
    claim = ClaimService.create_claim(
        parse_int(body.get('clubId')),
        body.get('claimantEmail'),
        body.get('claimantName'),
        body.get('verificationMethod')
    )

    response = {
        'success': True,
        'claimId': claim.id,
        'verificationMethod': claim.verification_method,
        'clubName': claim.club.name,
    }
    if claim.verification_method == VerificationMethod.INSTAGRAM:
        response['instagramCode'] = claim.instagram_code
        response['message'] = 'Please DM the code to @findmyrun from your club Instagram account'
    else:
        response['message'] = 'Verification email sent to the club contact email'
    return jsonify(response)


@claims_bp.route('/api/claims', methods=['GET'])
def claim_status():
    claim = ClaimService.get_status(parse_int(request.args.get('id')))
    return jsonify(claim.to_status_dict())


@claims_bp.route('/api/claims/<int:claim_id>/verify', methods=['GET'])
def verify_claim(claim_id):
    try:
        club = ClaimService.verify_by_link(claim_id, request.args.get('token'))
    except AlreadyProcessedError as e:
        return result_redirect('/claim/error', reason=f'already_{e.status}')
    except FindMyRunError as e:
        return result_redirect('/claim/error', reason=_reason(e))
    return result_redirect('/claim/success', club=club.name)


@claims_bp.route('/api/admin/claims/<int:claim_id>/approve', methods=['GET'])
def admin_approve_claim(claim_id):
    try:
        club = ClaimService.admin_approve(claim_id, request.args.get('token'))
    except AlreadyProcessedError as e:
        code = 'approved' if e.status == ClaimStatus.VERIFIED else e.status
        return result_redirect('/admin', message=f'claim_already_{code}')
    except FindMyRunError as e:
        return result_redirect('/admin', error=_reason(e))
    return result_redirect('/admin', message='claim_approved', club=club.name)


@claims_bp.route('/api/admin/claims/<int:claim_id>/reject', methods=['GET'])
def admin_reject_claim(claim_id):
    try:
        claim = ClaimService.admin_reject(
            claim_id, request.args.get('token'), request.args.get('reason')
        )
    except AlreadyProcessedError as e:
        return result_redirect('/admin', message=f'claim_already_{e.status}')
    except FindMyRunError as e:
        return result_redirect('/admin', error=_reason(e))
    return result_redirect('/admin', message='claim_rejected', club=claim.club.name)
