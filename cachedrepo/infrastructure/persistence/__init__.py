"""Persistence: SQLAlchemy database setup and repositories."""
