"""Base Repository: connection handling shared by every Supaco repository.

Every statement borrows a pooled connection, runs, and hands it back in a
finally block. Subclasses only write SQL:

    class ProspectRepository(BaseRepository):
        def get_owned(self, prospect_id, user_id):
            return self.query_one(
                'SELECT * FROM prospects WHERE id = %s AND user_id = %s',
                (prospect_id, user_id),
            )

Multi-statement work that must be atomic goes through execute_many(), which
passes a single cursor to a callback and commits once.
"""

from database import get_db, get_cursor, release_db, dict_from_row


class BaseRepository:

    def query_one(self, sql, params=None):
        """Run a SELECT and return the first row as a dict, or None."""
        conn = get_db()
        try:
            cursor = get_cursor(conn)
            cursor.execute(sql, params or ())
            return dict_from_row(cursor.fetchone())
        finally:
            release_db(conn)

    def query_all(self, sql, params=None):
        """Run a SELECT and return every row as a list of dicts."""
        conn = get_db()
        try:
            cursor = get_cursor(conn)
            cursor.execute(sql, params or ())
            return [dict_from_row(row) for row in cursor.fetchall()]
        finally:
            release_db(conn)

    def execute(self, sql, params=None, returning=False):
        """Run an INSERT/UPDATE/DELETE and commit.

        Returns the RETURNING row as a dict when returning=True, otherwise
        the affected row count.
        """
        def _work(cursor):
            cursor.execute(sql, params or ())
            if returning:
                return dict_from_row(cursor.fetchone())
            return cursor.rowcount

        return self.execute_many(_work)

    def execute_many(self, callback):
        """Run callback(cursor) inside one transaction.

        Commits when the callback returns, rolls back and re-raises when it
        fails.
        """
        conn = get_db()
        try:
            conn.autocommit = False
            result = callback(get_cursor(conn))
            conn.commit()
            return result
        except Exception:
            conn.rollback()
            raise
        finally:
            release_db(conn)
