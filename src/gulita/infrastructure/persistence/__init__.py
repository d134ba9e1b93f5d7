"""Persistence layer: database engine, models and repositories."""

from gulita.infrastructure.persistence.database import (
    Base,
    DatabaseManager,
    SessionScope,
    close_database,
    get_db_manager,
    init_database,
)

__all__ = [
    "Base",
    "DatabaseManager",
    "SessionScope",
    "close_database",
    "get_db_manager",
    "init_database",
]
