from flask import Blueprint, jsonify
from flask_login import current_user, login_required

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the card room server!'})


@main.route('/api/auth/user')
@login_required
def get_current_user():
    return jsonify(current_user.to_dict())
