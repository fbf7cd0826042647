"""CRM API routes: prospect status pipeline."""

import logging

from flask import jsonify
from flask_login import current_user

from core.utils.api_helpers import api_login_required, get_json_or_error, safe_error_response
from . import crm_bp
from .constants import PROSPECT_STATUSES
from .repositories import ProspectRepository

logger = logging.getLogger('supaco.crm.routes')

_prospect_repo = ProspectRepository()


@crm_bp.route('/prospects/<int:prospect_id>/status', methods=['PATCH'])
@api_login_required
def api_update_prospect_status(prospect_id):
    """Change a prospect's status; 'won' converts it into a project when none is linked.

    Body: {"status": "<prospect status>"}
    """
    data, error = get_json_or_error()
    if error:
        return error

    status = data.get('status')
    if status not in PROSPECT_STATUSES:
        return jsonify({'message': 'Invalid status'}), 400

    try:
        result = _prospect_repo.update_status(prospect_id, current_user.id, status)
        if result is None:
            return jsonify({'message': 'Prospect not found'}), 404
        prospect = _prospect_repo.get_owned(prospect_id, current_user.id)
    except Exception as e:
        return safe_error_response(e)

    if result['project_created']:
        logger.info(f"Prospect {prospect_id} won, project {result['project_id']} created")
        return jsonify({
            'prospect': prospect,
            'projectCreated': True,
            'projectId': result['project_id'],
        })

    return jsonify({'prospect': prospect, 'projectCreated': False})
