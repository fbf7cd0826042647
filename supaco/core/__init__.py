"""Supaco Core Platform Module.

Shared infrastructure used across all Supaco sections:
- Base repository over the database connection pool
- Authentication (users, sessions)
- Logging and API helpers
"""
