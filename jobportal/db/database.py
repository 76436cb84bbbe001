from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from contextlib import contextmanager
from loguru import logger

from jobportal.core.config import get_settings
from jobportal.db.schema import metadata

settings = get_settings()


def build_engine(url: str) -> Engine:
    """
    Create the SQLAlchemy engine for the configured URL.

    PostgreSQL gets a connection pool (5 ready, 10 overflow under load).
    SQLite (local runs and tests) shares one connection so an in-memory
    database survives across sessions.
    """
    if url.startswith("sqlite"):
        sqlite_engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=settings.debug
        )

        @event.listens_for(sqlite_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            dbapi_connection.execute("PRAGMA foreign_keys=ON")

        return sqlite_engine
    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        echo=settings.debug  # Log SQL queries in debug mode
    )


engine = build_engine(settings.sqlalchemy_url)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def get_db_session():
    """
    Context manager for database sessions.
    Usage:
        with get_db_session() as db:
            db.execute(text("SELECT * FROM users"))
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> None:
    """Create all tables that don't exist yet."""
    metadata.create_all(bind=engine)
    logger.info("Relational schema ready")


def test_db_connection() -> bool:
    """
    Test if the relational database is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session() as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


def execute_raw_sql(sql: str, params: dict = None) -> list:
    """
    Execute raw SQL and return results as list of dicts.
    This is useful for list/report queries.
    """
    with get_db_session() as db:
        result = db.execute(text(sql), params or {})
        # Convert rows to dicts
        columns = result.keys()
        return [dict(zip(columns, row)) for row in result.fetchall()]


def fetch_one(sql: str, params: dict = None):
    """Execute raw SQL and return the first row as a dict (or None)."""
    rows = execute_raw_sql(sql, params)
    return rows[0] if rows else None


def contains_pattern(value: str) -> str:
    """
    Case-insensitive substring pattern for `LOWER(col) LIKE :p ESCAPE '\\'`.
    Wildcards typed by the user match literally.
    """
    escaped = value.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
