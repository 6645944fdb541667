"""Client-local storage."""

from coachai.db.database import close_database, get_db, init_database
from coachai.db.session_store import SessionStore

__all__ = ["get_db", "init_database", "close_database", "SessionStore"]
