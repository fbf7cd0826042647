"""Supaco Core Authentication Module.

Session-based authentication (Flask-Login) for the JSON API.
"""
from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

from . import routes  # noqa: E402, F401
