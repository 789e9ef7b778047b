"""Database utilities - engine, session, migrations."""

from src.sitt.core.db.engine import create_tables, dispose_engine, get_engine
from src.sitt.core.db.migrations import run_migrations_async, run_migrations_sync
from src.sitt.core.db.session import get_session_factory

__all__ = [
    # Engine
    "create_tables",
    "dispose_engine",
    "get_engine",
    # Session
    "get_session_factory",
    # Migrations
    "run_migrations_async",
    "run_migrations_sync",
]
