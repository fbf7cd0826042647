from .project_repository import ProjectRepository
from .prospect_repository import ProspectRepository
from .task_repository import TaskRepository
from .note_repository import NoteRepository

__all__ = ['ProjectRepository', 'ProspectRepository', 'TaskRepository', 'NoteRepository']
