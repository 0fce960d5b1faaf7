"""
Database engine and session management for the price cache.

The engine is created lazily from settings and can be rebound to another
URL (tests, AppContext) through configure_database().
"""

from pathlib import Path
from typing import Any, Generator, Optional

from sqlalchemy import create_engine, event, Engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from wealthdash.config.settings import get_settings

Base = declarative_base()

# Module-level database state (can be reconfigured at runtime)
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None

# Wait this long for a competing writer before failing with "database is locked"
SQLITE_BUSY_TIMEOUT_MS = 5000


def _is_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite")


def _sqlite_pragmas(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS}")
    cursor.close()


def _build_engine(database_url: str) -> Engine:
    connect_args = {}
    if _is_sqlite(database_url):
        # Sessions are opened from FastAPI's worker threads
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, connect_args=connect_args, echo=False)
    if _is_sqlite(database_url):
        event.listen(engine, "connect", _sqlite_pragmas)
    return engine


def configure_database(database_url: str) -> Engine:
    """Bind the module-level engine and session factory to database_url."""
    global _engine, _SessionLocal
    reset_database()
    _engine = _build_engine(database_url)
    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    return _engine


def get_engine() -> Engine:
    """Get or create the database engine."""
    if _engine is None:
        return configure_database(get_settings().get_database_url())
    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create the session factory."""
    if _SessionLocal is None:
        get_engine()
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request, rolled back on error."""
    db = get_session_factory()()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_session() -> Session:
    """Get a new database session (for non-generator use)."""
    return get_session_factory()()


def create_tables(engine: Engine) -> None:
    """Create the price cache tables if they do not exist."""
    from wealthdash.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def init_db() -> None:
    """Initialize tables on the configured database."""
    create_tables(get_engine())


def init_db_with_path(db_path: Path) -> None:
    """Point the application at a SQLite file and create its tables."""
    create_tables(configure_database(f"sqlite:///{db_path}"))


def reset_database() -> None:
    """Dispose the engine so the next use rebuilds it from settings."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()

    _engine = None
    _SessionLocal = None
