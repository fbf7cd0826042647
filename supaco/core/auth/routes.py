"""Auth module routes: register, login, logout, current user."""
import re

from flask import jsonify, request
from flask_login import login_user, logout_user, current_user

from core.utils.api_helpers import (
    api_login_required, get_json_or_error, safe_error_response, rate_limited, RateLimiter,
)
from core.utils.logging_config import get_logger
from . import auth_bp
from .models import User
from .repositories import UserRepository

logger = get_logger('supaco.auth.routes')

_user_repo = UserRepository()
_auth_limiter = RateLimiter()

_EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
MIN_PASSWORD_LENGTH = 8


def _ip_key():
    return f'auth:{request.remote_addr}'


def _text(data, key, strip=True):
    """String field from a JSON body; anything else counts as missing."""
    value = data.get(key)
    if not isinstance(value, str):
        return ''
    return value.strip() if strip else value


@auth_bp.route('/register', methods=['POST'])
@rate_limited(_auth_limiter, max_requests=10, window_seconds=300, key_func=_ip_key)
def register():
    """Create an account and open a session."""
    data, error = get_json_or_error()
    if error:
        return error

    name = _text(data, 'name')
    email = _text(data, 'email')
    password = _text(data, 'password', strip=False)

    if not name or not _EMAIL_RE.match(email) or len(password) < MIN_PASSWORD_LENGTH:
        return jsonify({'message': 'Name, valid email and a password of at least '
                                   f'{MIN_PASSWORD_LENGTH} characters are required'}), 400

    try:
        user_data = _user_repo.create(name, email, password)
    except Exception as e:
        return safe_error_response(e)

    # Generic message so existing emails cannot be enumerated
    if not user_data:
        return jsonify({'message': 'Unable to create the account'}), 400

    user = User(user_data)
    login_user(user)
    logger.info(f'User {user.id} registered')
    return jsonify({'message': 'Account created', 'user': user.to_dict()}), 201


@auth_bp.route('/login', methods=['POST'])
@rate_limited(_auth_limiter, max_requests=10, window_seconds=300, key_func=_ip_key)
def login():
    """Check credentials and open a session."""
    data, error = get_json_or_error()
    if error:
        return error

    email = _text(data, 'email')
    password = _text(data, 'password', strip=False)
    if not email or not password:
        return jsonify({'message': 'Email and password are required'}), 400

    try:
        user_data = _user_repo.authenticate(email, password)
    except Exception as e:
        return safe_error_response(e)

    if not user_data:
        logger.warning(f'Failed login attempt for {email}')
        return jsonify({'message': 'Incorrect email or password'}), 401

    user = User(user_data)
    login_user(user, remember=bool(data.get('remember')))
    _user_repo.update_last_login(user.id)
    return jsonify({'message': 'Logged in', 'user': user.to_dict()})


@auth_bp.route('/logout', methods=['POST'])
@api_login_required
def logout():
    logout_user()
    return jsonify({'message': 'Logged out'})


@auth_bp.route('/me', methods=['GET'])
@api_login_required
def me():
    return jsonify({'user': current_user.to_dict()})
