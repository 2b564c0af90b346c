from flask import Blueprint, current_app, jsonify

from .auth import admin_required
from .services.admin_service import AdminService, load_seed_file, migrate_seed
from .utils import json_body, parse_int

admin_bp = Blueprint('admin_bp', __name__)


@admin_bp.route('/api/admin/clubs', methods=['GET'])
@admin_required
def list_clubs():
    return jsonify(clubs=[club.to_dict() for club in AdminService.list_clubs()])


@admin_bp.route('/api/admin/clubs', methods=['DELETE'])
@admin_required
def delete_club():
    body = json_body()
    AdminService.delete_club(parse_int(body.get('id')), body.get('name'))
    return jsonify(success=True, message='Club deleted')


@admin_bp.route('/api/admin/clubs/<int:club_id>/verified', methods=['POST'])
@admin_required
def set_verified(club_id):
    body = json_body()
    club = AdminService.set_verified(club_id, body.get('verified'))
    return jsonify(success=True, club=club.to_dict())


@admin_bp.route('/api/admin/submissions', methods=['GET'])
@admin_required
def list_submissions():
    return jsonify(submissions=[s.to_dict() for s in AdminService.list_submissions()])


@admin_bp.route('/api/admin/submissions', methods=['DELETE'])
@admin_required
def delete_submission():
    body = json_body()
    AdminService.delete_submission(parse_int(body.get('id')))
    return jsonify(success=True, message='Submission deleted')


@admin_bp.route('/api/admin/claims', methods=['GET'])
@admin_required
def list_claims():
    return jsonify(claims=[claim.to_dict() for claim in AdminService.list_claims()])


@admin_bp.route('/api/admin/claims', methods=['DELETE'])
@admin_required
def delete_claim():
    body = json_body()
    AdminService.delete_claim(parse_int(body.get('id')))
    return jsonify(success=True)


@admin_bp.route('/api/admin/migrate-seed', methods=['POST'])
@admin_required
def migrate_seed_data():
    records = load_seed_file()
    current_app.logger.info(f"Seed clubs loaded: {len(records)}")
    return jsonify(migrate_seed(records))
