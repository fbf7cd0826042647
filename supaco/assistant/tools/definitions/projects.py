"""Project actions: create projects, tasks and notes, change project status."""

import logging

from crm.constants import PROJECT_STATUSES, TASK_PRIORITIES
from ...models import ActionResult
from ..registry import tool_registry

logger = logging.getLogger('supaco.assistant.tools.projects')

# create_project may only open a project in one of the live states
_CREATE_STATUSES = ['quote', 'in_progress', 'completed']


def _project_not_found(project_name):
    return ActionResult(success=False, message=f'Project "{project_name}" not found')


# ════════════════════════════════════════════════════════════════
# Create Project
# ════════════════════════════════════════════════════════════════

def create_project(args: dict, user_id: int) -> ActionResult:
    """Insert a project; optional fields default to NULL and status to 'quote'."""
    from crm.repositories import ProjectRepository

    status = args.get('status') or None
    if status is not None and status not in _CREATE_STATUSES:
        return ActionResult(success=False, message=f'Invalid project status "{status}"')

    project_id = ProjectRepository().create(
        user_id=user_id,
        name=args['name'],
        client_name=args['client_name'],
        client_email=args.get('client_email') or None,
        client_phone=args.get('client_phone') or None,
        description=args.get('description') or None,
        budget=args.get('budget') or None,
        status=status,
        deadline=args.get('deadline') or None,
    )
    return ActionResult(
        success=True,
        message=f'Project "{args["name"]}" created for {args["client_name"]}',
        data={'id': project_id, **args},
    )


tool_registry.register(
    name='create_project',
    description='Create a new project for a client.',
    parameters={
        'type': 'object',
        'properties': {
            'name': {'type': 'string', 'description': 'Project name'},
            'client_name': {'type': 'string', 'description': 'Client name'},
            'client_email': {'type': 'string', 'description': 'Client email (optional)'},
            'client_phone': {'type': 'string', 'description': 'Client phone (optional)'},
            'description': {'type': 'string', 'description': 'Project description (optional)'},
            'budget': {'type': 'number', 'description': 'Budget in euros (optional)'},
            'status': {'type': 'string', 'enum': _CREATE_STATUSES, 'description': 'Project status'},
            'deadline': {'type': 'string', 'description': 'Deadline as YYYY-MM-DD (optional)'},
        },
        'required': ['name', 'client_name'],
    },
    handler=create_project,
    summary='Create the project "{name}" for {client_name}',
)


# ════════════════════════════════════════════════════════════════
# Create Task
# ════════════════════════════════════════════════════════════════

def create_task(args: dict, user_id: int) -> ActionResult:
    """Add a 'todo' task to the first project whose name contains project_name."""
    from crm.repositories import ProjectRepository, TaskRepository

    priority = args.get('priority') or None
    if priority is not None and priority not in TASK_PRIORITIES:
        return ActionResult(success=False, message=f'Invalid priority "{priority}"')

    project = ProjectRepository().find_by_name(user_id, args['project_name'])
    if not project:
        return _project_not_found(args['project_name'])

    task_id = TaskRepository().create(
        project_id=project['id'],
        title=args['title'],
        description=args.get('description') or None,
        priority=priority,
        due_date=args.get('due_date') or None,
    )
    return ActionResult(
        success=True,
        message=f'Task "{args["title"]}" added to project "{project["name"]}"',
        data={'id': task_id, 'project_id': project['id'], **args},
    )


tool_registry.register(
    name='create_task',
    description='Create a new task on an existing project.',
    parameters={
        'type': 'object',
        'properties': {
            'project_name': {'type': 'string', 'description': 'Name of the project to add the task to'},
            'title': {'type': 'string', 'description': 'Task title'},
            'description': {'type': 'string', 'description': 'Task description (optional)'},
            'priority': {'type': 'string', 'enum': list(TASK_PRIORITIES), 'description': 'Priority'},
            'due_date': {'type': 'string', 'description': 'Due date as YYYY-MM-DD (optional)'},
        },
        'required': ['project_name', 'title'],
    },
    handler=create_task,
    summary='Add the task "{title}" to the project "{project_name}"',
)


# ════════════════════════════════════════════════════════════════
# Update Project Status
# ════════════════════════════════════════════════════════════════

def update_project_status(args: dict, user_id: int) -> ActionResult:
    from crm.repositories import ProjectRepository

    new_status = args['new_status']
    if new_status not in PROJECT_STATUSES:
        return ActionResult(success=False, message=f'Invalid project status "{new_status}"')

    repo = ProjectRepository()
    project = repo.find_by_name(user_id, args['project_name'])
    if not project:
        return _project_not_found(args['project_name'])

    if not repo.update_status(project['id'], user_id, new_status):
        return _project_not_found(args['project_name'])

    return ActionResult(
        success=True,
        message=f'Project "{project["name"]}" status changed to "{new_status}"',
        data={'id': project['id'], 'status': new_status},
    )


tool_registry.register(
    name='update_project_status',
    description='Change the status of an existing project.',
    parameters={
        'type': 'object',
        'properties': {
            'project_name': {'type': 'string', 'description': 'Project name'},
            'new_status': {'type': 'string', 'enum': list(PROJECT_STATUSES), 'description': 'New status'},
        },
        'required': ['project_name', 'new_status'],
    },
    handler=update_project_status,
    summary='Change the status of "{project_name}" to "{new_status}"',
)


# ════════════════════════════════════════════════════════════════
# Add Note To Project
# ════════════════════════════════════════════════════════════════

def add_note_to_project(args: dict, user_id: int) -> ActionResult:
    from crm.repositories import ProjectRepository, NoteRepository

    project = ProjectRepository().find_by_name(user_id, args['project_name'])
    if not project:
        return _project_not_found(args['project_name'])

    note_id = NoteRepository().create(
        project_id=project['id'],
        title=args['title'],
        content=args['content'],
    )
    return ActionResult(
        success=True,
        message=f'Note "{args["title"]}" added to project "{project["name"]}"',
        data={'id': note_id, 'project_id': project['id']},
    )


tool_registry.register(
    name='add_note_to_project',
    description='Add a note to an existing project.',
    parameters={
        'type': 'object',
        'properties': {
            'project_name': {'type': 'string', 'description': 'Project name'},
            'title': {'type': 'string', 'description': 'Note title'},
            'content': {'type': 'string', 'description': 'Note content'},
        },
        'required': ['project_name', 'title', 'content'],
    },
    handler=add_note_to_project,
    summary='Add the note "{title}" to the project "{project_name}"',
)
