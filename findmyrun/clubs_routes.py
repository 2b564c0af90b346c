from datetime import date, datetime, timedelta

from flask import Blueprint, jsonify, request

from . import db
from .constants import SubmissionStatus
from .errors import NotFoundError, ValidationError
from .models import Attendance, Club, RunSession
from .utils import json_body

clubs_bp = Blueprint('clubs_bp', __name__)


def _get_listed_club(club_id):
    club = Club.query.filter_by(id=club_id, status=SubmissionStatus.APPROVED).first()
    if not club:
        raise NotFoundError('Club not found')
    return club


@clubs_bp.route('/api/clubs', methods=['GET'])
def list_clubs():
    query = Club.query.filter_by(status=SubmissionStatus.APPROVED)
    city = request.args.get('city')
    if city:
        query = query.filter(db.func.lower(Club.city) == city.strip().lower())
    clubs = query.order_by(Club.name).all()
    return jsonify(clubs=[club.to_dict() for club in clubs])


@clubs_bp.route('/api/clubs/<int:club_id>', methods=['GET'])
def get_club(club_id):
    club = _get_listed_club(club_id)
    return jsonify(club.to_dict(include_sessions=True))


@clubs_bp.route('/api/clubs/<int:club_id>/sessions', methods=['GET'])
def list_sessions(club_id):
    club = _get_listed_club(club_id)
    sessions = RunSession.query.filter(
        db.or_(RunSession.club_id == club.id, RunSession.club_name == club.name)
    ).order_by(RunSession.id).all()
    return jsonify(sessions=[s.to_dict() for s in sessions])


@clubs_bp.route('/api/attendance', methods=['GET'])
def attendance_counts():
    """Going counts for the next seven days, per club or for one ``club``."""
    today = date.today()
    query = Attendance.query.filter(
        Attendance.session_date >= today,
        Attendance.session_date < today + timedelta(days=7)
    )

    club_name = request.args.get('club')
    if club_name:
        return jsonify(club=club_name, count=query.filter_by(club_name=club_name).count())

    rows = query.with_entities(Attendance.club_name, db.func.count(Attendance.id))\
        .group_by(Attendance.club_name).all()
    return jsonify({name: count for name, count in rows})


@clubs_bp.route('/api/attendance', methods=['POST'])
def record_attendance():
    body = json_body()
    club_name = body.get('clubName')
    session_date = body.get('sessionDate')
    visitor_id = body.get('visitorId') or None
    if not club_name or not session_date:
        raise ValidationError('clubName and sessionDate are required')
    try:
        session_date = datetime.strptime(session_date, '%Y-%m-%d').date()
    except (TypeError, ValueError):
        raise ValidationError('Invalid value for field: sessionDate')

    if visitor_id and Attendance.query.filter_by(
            club_name=club_name, session_date=session_date, visitor_id=visitor_id).first():
        return jsonify(success=True, message='Already marked as going!', alreadyGoing=True)

    club = Club.query.filter_by(name=club_name).first()
    try:
        db.session.add(Attendance(
            club_id=club.id if club else None,
            club_name=club_name,
            session_date=session_date,
            visitor_id=visitor_id
        ))
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return jsonify(success=True, message="You're going!")
