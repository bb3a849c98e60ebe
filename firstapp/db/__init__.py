"""Database collaborator: builds the handle carried as `Env.db_handle`."""

from firstapp.db.client import close_db, current_session, init_db, session_scope

__all__ = ["init_db", "close_db", "session_scope", "current_session"]
