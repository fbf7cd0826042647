"""Task Repository."""

from core.base_repository import BaseRepository
from ..constants import TASK_INITIAL_STATUS, TASK_DEFAULT_PRIORITY


class TaskRepository(BaseRepository):

    def create(self, project_id, title, description=None, priority=None, due_date=None):
        """Insert a task in the initial 'todo' status and return its id.

        The caller is responsible for checking the project belongs to the user.
        """
        row = self.execute(
            '''INSERT INTO tasks (project_id, title, description, status, priority, due_date)
               VALUES (%s, %s, %s, %s, %s, %s)
               RETURNING id''',
            (project_id, title, description, TASK_INITIAL_STATUS,
             priority or TASK_DEFAULT_PRIORITY, due_date),
            returning=True
        )
        return row['id']
