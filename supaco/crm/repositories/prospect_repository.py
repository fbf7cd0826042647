"""Prospect Repository: create, fuzzy lookup, status changes (with won → project conversion)."""

from core.base_repository import BaseRepository
from database import dict_from_row
from ..constants import (
    PROSPECT_DEFAULT_SOURCE, PROSPECT_INITIAL_STATUS, PROSPECT_WON_STATUS,
    PROJECT_INITIAL_STATUS, like_pattern,
)


def split_full_name(full_name):
    """'Jane van Dyke' -> ('Jane', 'van Dyke'); a single word is used for both parts."""
    parts = full_name.split()
    if not parts:
        return '', ''
    first = parts[0]
    last = ' '.join(parts[1:]) or first
    return first, last


class ProspectRepository(BaseRepository):

    def get_owned(self, prospect_id, user_id):
        return self.query_one(
            '''SELECT p.*, pr.name AS project_name
               FROM prospects p
               LEFT JOIN projects pr ON p.project_id = pr.id
               WHERE p.id = %s AND p.user_id = %s''',
            (prospect_id, user_id)
        )

    def find_by_name(self, user_id, full_name):
        """First of the user's prospects matching a free-text "First Last" reference.

        Matches when the first name contains the first word, the last name
        contains the remaining words, or the full name contains the whole text.
        """
        first, last = split_full_name(full_name)
        return self.query_one(
            '''SELECT id, first_name, last_name, status, project_id FROM prospects
               WHERE user_id = %s
                 AND (first_name ILIKE %s
                      OR last_name ILIKE %s
                      OR (first_name || ' ' || last_name) ILIKE %s)
               ORDER BY id
               LIMIT 1''',
            (user_id, like_pattern(first), like_pattern(last), like_pattern(full_name.strip()))
        )

    def create(self, user_id, first_name, last_name, email=None, phone=None, company=None,
               source=None, estimated_budget=None, needs=None, notes=None):
        row = self.execute(
            '''INSERT INTO prospects
               (user_id, first_name, last_name, email, phone, company,
                source, status, estimated_budget, needs, notes)
               VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
               RETURNING id''',
            (user_id, first_name, last_name, email, phone, company,
             source or PROSPECT_DEFAULT_SOURCE, PROSPECT_INITIAL_STATUS,
             estimated_budget, needs, notes),
            returning=True
        )
        return row['id']

    def update_status(self, prospect_id, user_id, status):
        """Change a prospect's status.

        Moving to 'won' while no project is linked creates a project from the
        prospect's details and links it, in the same transaction.

        Returns:
            None if the prospect does not belong to user_id, else
            {'prospect_id', 'status', 'project_created', 'project_id'}
        """
        def _work(cursor):
            cursor.execute(
                'SELECT * FROM prospects WHERE id = %s AND user_id = %s FOR UPDATE',
                (prospect_id, user_id)
            )
            prospect = dict_from_row(cursor.fetchone())
            if not prospect:
                return None

            project_id = prospect.get('project_id')
            project_created = False

            if status == PROSPECT_WON_STATUS and not project_id:
                full_name = f"{prospect['first_name']} {prospect['last_name']}"
                cursor.execute(
                    '''INSERT INTO projects
                       (user_id, name, client_name, client_email, client_phone,
                        description, budget, status)
                       VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                       RETURNING id''',
                    (user_id, f'Project {full_name}', full_name,
                     prospect.get('email'), prospect.get('phone'),
                     prospect.get('needs'), prospect.get('estimated_budget'),
                     PROJECT_INITIAL_STATUS)
                )
                project_id = cursor.fetchone()['id']
                project_created = True

            cursor.execute(
                'UPDATE prospects SET status = %s, project_id = %s WHERE id = %s AND user_id = %s',
                (status, project_id, prospect_id, user_id)
            )
            return {
                'prospect_id': prospect_id,
                'status': status,
                'project_created': project_created,
                'project_id': project_id,
            }

        return self.execute_many(_work)

    def get_recent(self, user_id, limit=20):
        return self.query_all(
            '''SELECT id, first_name, last_name, company, status, estimated_budget, source
               FROM prospects WHERE user_id = %s
               ORDER BY updated_at DESC LIMIT %s''',
            (user_id, limit)
        )

    def get_stats(self, user_id):
        return self.query_one(
            '''SELECT COUNT(*) AS total,
                      COUNT(*) FILTER (WHERE status = 'new') AS new,
                      COUNT(*) FILTER (WHERE status = 'won') AS won,
                      COUNT(*) FILTER (WHERE status = 'lost') AS lost
               FROM prospects WHERE user_id = %s''',
            (user_id,)
        )
