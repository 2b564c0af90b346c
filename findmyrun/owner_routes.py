from flask import Blueprint, current_app, g, jsonify, request

from .auth import owner_session_required
from .services.owner_service import OwnerService
from .utils import json_body, result_redirect

owner_bp = Blueprint('owner_bp', __name__)


@owner_bp.route('/api/owner/login', methods=['POST'])
def request_login():
    body = json_body()
    message = OwnerService.request_login(body.get('email'))
    return jsonify(success=True, message=message)


@owner_bp.route('/api/owner/auth', methods=['GET'])
def redeem_login():
    email = request.args.get('email')
    token = request.args.get('token')
    if not email or not token:
        return result_redirect('/owner/login', error='invalid_link')

    cookie_value = OwnerService.redeem_login(email, token)
    if not cookie_value:
        return result_redirect('/owner/login', error='invalid_or_expired')

    response = result_redirect('/owner')
    response.set_cookie(
        current_app.config['OWNER_SESSION_COOKIE'],
        cookie_value,
        max_age=int(current_app.config['OWNER_SESSION_TTL'].total_seconds()),
        httponly=True,
        secure=current_app.config['SESSION_COOKIE_SECURE'],
        samesite='Lax',
        path='/'
    )
    return response


@owner_bp.route('/api/owner/auth', methods=['POST'])
def logout():
    cookie_name = current_app.config['OWNER_SESSION_COOKIE']
    OwnerService.logout(request.cookies.get(cookie_name))
    response = jsonify(success=True)
    response.delete_cookie(cookie_name, path='/')
    return response


@owner_bp.route('/api/owner/clubs', methods=['GET'])
@owner_session_required
def list_clubs():
    clubs = OwnerService.list_owned_clubs(g.owner_email)
    return jsonify(ownerEmail=g.owner_email, clubs=[club.to_summary_dict() for club in clubs])


@owner_bp.route('/api/owner/clubs/<int:club_id>', methods=['GET'])
@owner_session_required
def get_club(club_id):
    club = OwnerService.get_owned_club(club_id, g.owner_email)
    return jsonify(club.to_dict(include_sessions=True))


@owner_bp.route('/api/owner/clubs/<int:club_id>', methods=['PUT'])
@owner_session_required
def update_club(club_id):
    body = json_body()
    club = OwnerService.edit_club(club_id, g.owner_email, body)
    return jsonify(success=True, club=club.to_dict())
