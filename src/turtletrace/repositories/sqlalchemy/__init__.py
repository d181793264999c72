"""SQLAlchemy repository implementations."""

from turtletrace.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    init_db_with_path,
    reset_database,
    Base,
)
from turtletrace.repositories.sqlalchemy.collection_store import SqlAlchemyCollectionStore

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "init_db_with_path",
    "reset_database",
    "Base",
    "SqlAlchemyCollectionStore",
]
