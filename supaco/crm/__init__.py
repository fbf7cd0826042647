"""Supaco CRM: projects, prospects, tasks and notes.

Every query is scoped by the owning user's id.
"""
from flask import Blueprint

crm_bp = Blueprint('crm', __name__, url_prefix='/api')

from . import routes  # noqa: E402, F401
