"""User Repository - Data access layer for user accounts."""
from typing import Optional, Dict, Any

from werkzeug.security import generate_password_hash, check_password_hash

from core.base_repository import BaseRepository


class UserRepository(BaseRepository):
    """Repository for user data access operations."""

    _PUBLIC_COLUMNS = 'id, name, email, last_login, created_at'

    def get_by_id(self, user_id: int) -> Optional[Dict[str, Any]]:
        """Get a user by ID (without the password hash)."""
        return self.query_one(
            f'SELECT {self._PUBLIC_COLUMNS} FROM users WHERE id = %s', (user_id,))

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Get a user by email, including the password hash."""
        return self.query_one('SELECT * FROM users WHERE LOWER(email) = LOWER(%s)', (email,))

    def create(self, name: str, email: str, password: str) -> Optional[Dict[str, Any]]:
        """Create a user. Returns None when the email is already registered."""
        if self.get_by_email(email):
            return None
        return self.execute(f'''
            INSERT INTO users (name, email, password_hash)
            VALUES (%s, %s, %s)
            RETURNING {self._PUBLIC_COLUMNS}
        ''', (name.strip(), email.strip().lower(), generate_password_hash(password)), returning=True)

    def authenticate(self, email: str, password: str) -> Optional[Dict[str, Any]]:
        """Return the user when the credentials match, else None."""
        user = self.get_by_email(email)
        if not user or not user.get('password_hash'):
            return None
        if not check_password_hash(user['password_hash'], password):
            return None
        user.pop('password_hash', None)
        return user

    def update_last_login(self, user_id: int) -> bool:
        return self.execute(
            'UPDATE users SET last_login = CURRENT_TIMESTAMP WHERE id = %s', (user_id,)) > 0
