"""Project Repository: create, fuzzy lookup, status and dashboard reads for projects."""

from core.base_repository import BaseRepository
from ..constants import PROJECT_INITIAL_STATUS, PROJECT_DONE_STATUS, like_pattern


class ProjectRepository(BaseRepository):

    def find_by_name(self, user_id, name):
        """First of the user's projects whose name contains `name` (case-insensitive)."""
        return self.query_one(
            '''SELECT id, name, client_name, status FROM projects
               WHERE user_id = %s AND name ILIKE %s
               ORDER BY id
               LIMIT 1''',
            (user_id, like_pattern(name))
        )

    def create(self, user_id, name, client_name, client_email=None, client_phone=None,
               description=None, budget=None, status=None, deadline=None):
        row = self.execute(
            '''INSERT INTO projects
               (user_id, name, client_name, client_email, client_phone,
                description, budget, status, deadline)
               VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
               RETURNING id''',
            (user_id, name, client_name, client_email, client_phone,
             description, budget, status or PROJECT_INITIAL_STATUS, deadline),
            returning=True
        )
        return row['id']

    def update_status(self, project_id, user_id, status):
        return self.execute(
            'UPDATE projects SET status = %s WHERE id = %s AND user_id = %s',
            (status, project_id, user_id)
        ) > 0

    def get_recent(self, user_id, limit=20):
        return self.query_all(
            '''SELECT id, name, client_name, status, budget, deadline, created_at
               FROM projects WHERE user_id = %s
               ORDER BY created_at DESC LIMIT %s''',
            (user_id, limit)
        )

    def get_stats(self, user_id):
        return self.query_one(
            '''SELECT COUNT(*) AS total,
                      COUNT(*) FILTER (WHERE status = 'quote') AS quote,
                      COUNT(*) FILTER (WHERE status = 'in_progress') AS in_progress,
                      COUNT(*) FILTER (WHERE status = 'completed') AS completed,
                      COALESCE(SUM(budget), 0) AS total_budget
               FROM projects WHERE user_id = %s''',
            (user_id,)
        )

    def get_upcoming_deadlines(self, user_id, limit=5):
        return self.query_all(
            '''SELECT name, client_name, deadline
               FROM projects
               WHERE user_id = %s AND deadline IS NOT NULL
                 AND deadline >= CURRENT_DATE AND status != %s
               ORDER BY deadline ASC LIMIT %s''',
            (user_id, PROJECT_DONE_STATUS, limit)
        )
