from flask import Blueprint, jsonify, request

from .errors import AlreadyProcessedError, FindMyRunError
from .services.moderation_service import ModerationService
from .services.submission_service import SubmissionService
from .utils import json_body, result_redirect

submissions_bp = Blueprint('submissions_bp', __name__)

RESULT_PAGE = '/submission-result'


@submissions_bp.route('/api/submissions', methods=['POST'])
def create_submission():
    body = json_body()
    SubmissionService.submit(body)
    # Same reply for honeypot hits, so bots learn nothing
    return jsonify(success=True, message='Club submitted for review'), 201


@submissions_bp.route('/api/submissions/<int:submission_id>/approve', methods=['GET'])
def approve_submission(submission_id):
    try:
        club = ModerationService.approve(submission_id, request.args.get('token'))
    except AlreadyProcessedError as e:
        return result_redirect(RESULT_PAGE, status='info', message=e.message)
    except FindMyRunError as e:
        return result_redirect(RESULT_PAGE, status='error', message=e.message)
    return result_redirect(RESULT_PAGE, status='success', action='approved', club=club.name)


@submissions_bp.route('/api/submissions/<int:submission_id>/reject', methods=['GET'])
def reject_submission(submission_id):
    try:
        submission = ModerationService.reject(
            submission_id, request.args.get('token'), request.args.get('reason')
        )
    except AlreadyProcessedError as e:
        return result_redirect(RESULT_PAGE, status='info', message=e.message)
    except FindMyRunError as e:
        return result_redirect(RESULT_PAGE, status='error', message=e.message)
    return result_redirect(RESULT_PAGE, status='success', action='rejected', club=submission.name)
