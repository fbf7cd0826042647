"""Note Repository."""

from core.base_repository import BaseRepository


class NoteRepository(BaseRepository):

    def create(self, project_id, title, content):
        row = self.execute(
            'INSERT INTO notes (project_id, title, content) VALUES (%s, %s, %s) RETURNING id',
            (project_id, title, content),
            returning=True
        )
        return row['id']
