# /app/db/database.py

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from app.core.config import DATABASE_URL


def build_engine(database_url: str = DATABASE_URL):
    """
    Creates the SQLAlchemy engine for the given URL.

    The 'check_same_thread' argument is only needed for SQLite, because
    sessions are opened from the worker thread pool. Foreign keys are
    switched on for SQLite so references behave like they do on PostgreSQL.
    """
    is_sqlite = database_url.startswith("sqlite")
    engine_args = {"connect_args": {"check_same_thread": False}} if is_sqlite else {}
    engine = create_engine(database_url, **engine_args)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def build_session_factory(engine) -> sessionmaker:
    """
    Each instance of the returned class is a database session.

    `expire_on_commit=False` keeps loaded attributes readable after the session
    has been closed, which is how results travel back to the request handlers.
    """
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


engine = build_engine()
SessionLocal = build_session_factory(engine)


def create_tables(bind=engine) -> None:
    """Creates any catalog table that does not exist yet."""
    from .base import Base
    Base.metadata.create_all(bind=bind)


# Dependency to get a DB session. Used by scripts and tests that need direct
# access; request handlers go through `get_db_service` instead.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
