"""SQLAlchemy repository implementations."""

from wealthdash.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    init_db_with_path,
    reset_database,
    Base,
)
from wealthdash.repositories.sqlalchemy.price_cache_repo import SqlAlchemyPriceCacheRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "init_db_with_path",
    "reset_database",
    "Base",
    "SqlAlchemyPriceCacheRepository",
]
