"""Prospect actions: create prospects, move them through the sales pipeline."""

import logging

from crm.constants import PROSPECT_STATUSES, PROSPECT_SOURCES
from ...models import ActionResult
from ..registry import tool_registry

logger = logging.getLogger('supaco.assistant.tools.prospects')


# ════════════════════════════════════════════════════════════════
# Create Prospect
# ════════════════════════════════════════════════════════════════

def create_prospect(args: dict, user_id: int) -> ActionResult:
    """Insert a prospect in the 'new' status; source defaults to 'other'."""
    from crm.repositories import ProspectRepository

    source = args.get('source') or None
    if source is not None and source not in PROSPECT_SOURCES:
        return ActionResult(success=False, message=f'Invalid source "{source}"')

    prospect_id = ProspectRepository().create(
        user_id=user_id,
        first_name=args['first_name'],
        last_name=args['last_name'],
        email=args.get('email') or None,
        phone=args.get('phone') or None,
        company=args.get('company') or None,
        source=source,
        estimated_budget=args.get('estimated_budget') or None,
        needs=args.get('needs') or None,
        notes=args.get('notes') or None,
    )
    return ActionResult(
        success=True,
        message=f'Prospect "{args["first_name"]} {args["last_name"]}" created',
        data={'id': prospect_id, **args},
    )


tool_registry.register(
    name='create_prospect',
    description='Create a new prospect (sales contact).',
    parameters={
        'type': 'object',
        'properties': {
            'first_name': {'type': 'string', 'description': "Prospect's first name"},
            'last_name': {'type': 'string', 'description': "Prospect's last name"},
            'email': {'type': 'string', 'description': 'Email (optional)'},
            'phone': {'type': 'string', 'description': 'Phone (optional)'},
            'company': {'type': 'string', 'description': 'Company name (optional)'},
            'source': {'type': 'string', 'enum': list(PROSPECT_SOURCES), 'description': 'Acquisition source'},
            'estimated_budget': {'type': 'number', 'description': 'Estimated budget in euros (optional)'},
            'needs': {'type': 'string', 'description': "Prospect's needs (optional)"},
            'notes': {'type': 'string', 'description': 'Additional notes (optional)'},
        },
        'required': ['first_name', 'last_name'],
    },
    handler=create_prospect,
    summary='Create the prospect "{first_name} {last_name}"',
)


# ════════════════════════════════════════════════════════════════
# Update Prospect Status
# ════════════════════════════════════════════════════════════════

def update_prospect_status(args: dict, user_id: int) -> ActionResult:
    """Change a prospect's status; 'won' converts it into a project when none is linked."""
    from crm.repositories import ProspectRepository

    new_status = args['new_status']
    if new_status not in PROSPECT_STATUSES:
        return ActionResult(success=False, message=f'Invalid prospect status "{new_status}"')

    repo = ProspectRepository()
    prospect = repo.find_by_name(user_id, args['prospect_name'])
    if not prospect:
        return ActionResult(success=False, message=f'Prospect "{args["prospect_name"]}" not found')

    outcome = repo.update_status(prospect['id'], user_id, new_status)
    if outcome is None:
        return ActionResult(success=False, message=f'Prospect "{args["prospect_name"]}" not found')

    full_name = f"{prospect['first_name']} {prospect['last_name']}"
    message = f'Prospect "{full_name}" status changed to "{new_status}"'
    if outcome['project_created']:
        message += f' and project "Project {full_name}" created'
        logger.info(f"Prospect {prospect['id']} won, project {outcome['project_id']} created")

    return ActionResult(
        success=True,
        message=message,
        data={
            'id': prospect['id'],
            'status': new_status,
            'project_created': outcome['project_created'],
            'project_id': outcome['project_id'],
        },
    )


tool_registry.register(
    name='update_prospect_status',
    description='Change the status of an existing prospect. Moving a prospect to "won" '
                'creates a project for it when it has none.',
    parameters={
        'type': 'object',
        'properties': {
            'prospect_name': {'type': 'string', 'description': "Prospect's full name (first last)"},
            'new_status': {'type': 'string', 'enum': list(PROSPECT_STATUSES), 'description': 'New status'},
        },
        'required': ['prospect_name', 'new_status'],
    },
    handler=update_prospect_status,
    summary='Change the status of "{prospect_name}" to "{new_status}"',
)
