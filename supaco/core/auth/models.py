"""Supaco Core Auth Models.

User model for Flask-Login authentication.
"""
from flask_login import UserMixin


class User(UserMixin):
    """User class for Flask-Login."""

    def __init__(self, user_data):
        self.id = user_data['id']
        self.email = user_data['email']
        self.name = user_data['name']

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'email': self.email}
