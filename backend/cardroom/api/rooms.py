from functools import wraps

from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

from cardroom import db

rooms = Blueprint('rooms', __name__)


def _engine():
    return current_app.extensions['game_engine']


def _respond(result, status=None):
    return jsonify(result.to_dict()), status or result.http_status


def _bad_request(message):
    return jsonify({'success': False, 'error': message}), 400


def _positive_int(value):
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def invited_only(view):
    """Reject callers missing from ALLOWED_IDENTITIES, when that list is set."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        allowed = current_app.config.get('ALLOWED_IDENTITIES') or []
        if allowed and current_user.get_id() not in allowed:
            return jsonify({'success': False, 'error': 'Access restricted to invited players only'}), 403
        return view(*args, **kwargs)
    return wrapper


@rooms.errorhandler(SQLAlchemyError)
def handle_db_error(exc):
    db.session.rollback()
    current_app.logger.exception(f"[db-error] {exc}")
    return jsonify({'success': False, 'error': 'Server error'}), 500


@rooms.route('/create', methods=['POST'])
@login_required
@invited_only
def create_room():
    """
    Creates a room with the caller as host and first player.
    """
    data = request.get_json(silent=True) or {}
    target_score = data.get('target_score')
    if target_score is not None and not _positive_int(target_score):
        return _bad_request('target_score must be a positive integer')
    result = _engine().create_room(current_user.get_id(), target_score)
    return _respond(result, 201)


@rooms.route('/join', methods=['POST'])
@login_required
@invited_only
def join_room():
    data = request.get_json(silent=True) or {}
    code = data.get('code')
    if not code or not isinstance(code, str):
        return _bad_request('Room code is required')
    return _respond(_engine().join_room(code.upper(), current_user.get_id()))


@rooms.route('/<int:room_id>/start', methods=['POST'])
@login_required
def start_game(room_id):
    return _respond(_engine().start_game(room_id, current_user.get_id()))


@rooms.route('/<int:room_id>/state', methods=['GET'])
@login_required
def get_game_state(room_id):
    state = _engine().get_state(room_id)
    if not state:
        return jsonify({'success': False, 'error': 'Room not found'}), 404
    return jsonify(state.to_dict())


@rooms.route('/<int:room_id>/hand', methods=['GET'])
@login_required
def get_hand(room_id):
    cards = _engine().get_hand(room_id, current_user.get_id())
    return jsonify([c.to_dict() for c in cards])


@rooms.route('/<int:room_id>/submit', methods=['POST'])
@login_required
def submit_card(room_id):
    data = request.get_json(silent=True) or {}
    card_id = data.get('card_id')
    if not _positive_int(card_id):
        return _bad_request('Card ID is required')
    return _respond(_engine().submit_card(room_id, current_user.get_id(), card_id))


@rooms.route('/<int:room_id>/judge', methods=['POST'])
@login_required
def judge_card(room_id):
    data = request.get_json(silent=True) or {}
    submission_id = data.get('submission_id')
    if not _positive_int(submission_id):
        return _bad_request('Submission ID is required')
    return _respond(_engine().judge_card(room_id, current_user.get_id(), submission_id))
