"""
Authentication API endpoints

Email/password registration and login. Both return a bearer token for the
Authorization header of organizer-only endpoints.
"""

from flask import Blueprint, jsonify, current_app
from flask_login import login_required, current_user
from flask_jwt_extended import create_access_token
from peewee import IntegrityError

from scene.errors import ValidationFailure, AuthenticationFailure, Conflict
from scene.models.user import User
from scene.utils import get_json_body, get_str, is_valid_email

bp = Blueprint('auth', __name__, url_prefix='/auth')

MIN_PASSWORD_LENGTH = 8


def _issue_token(user):
    return create_access_token(identity=user.id, additional_claims={'email': user.email})


@bp.route('/register', methods=['POST'])
def register():
    """Create an organizer account"""
    data = get_json_body()
    email = get_str(data, 'email').lower()
    password = get_str(data, 'password', strip=False)
    name = get_str(data, 'name')

    if not is_valid_email(email):
        raise ValidationFailure('A valid email is required')
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailure(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')
    if not name:
        raise ValidationFailure('Name is required')

    if User.get_or_none(User.email == email):
        raise Conflict('Email already registered')

    user = User(email=email, name=name)
    user.set_password(password)
    try:
        user.save(force_insert=True)
    except IntegrityError:
        raise Conflict('Email already registered')

    current_app.logger.info(f"Registered user {user.id}")
    return jsonify({'token': _issue_token(user), 'user': user.to_dict()})


@bp.route('/login', methods=['POST'])
def login():
    data = get_json_body()
    email = get_str(data, 'email').lower()
    password = get_str(data, 'password', strip=False)

    user = User.get_or_none(User.email == email)
    if not user or not user.check_password(password):
        raise AuthenticationFailure('Invalid credentials')

    return jsonify({'token': _issue_token(user), 'user': user.to_dict()})


@bp.route('/me')
@login_required
def me():
    """Return current user information as JSON"""
    return jsonify(current_user.to_dict())
