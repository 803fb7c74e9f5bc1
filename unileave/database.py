"""
Database engine, session factory and lifecycle helpers.
SQLite by default, any SQLAlchemy URL via DATABASE_URL.
"""
import logging

from dotenv import load_dotenv
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from unileave.core.config import settings

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DATABASE_URL = settings.DATABASE_URL
IS_SQLITE = settings.is_sqlite


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores FOREIGN KEY / ON DELETE CASCADE unless enabled per connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


if IS_SQLITE:
    engine = create_engine(
        DATABASE_URL,
        connect_args={"check_same_thread": False},
        echo=False,
    )
    enable_sqlite_foreign_keys(engine)
else:
    engine = create_engine(
        DATABASE_URL,
        echo=False,
        pool_pre_ping=True,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_recycle=settings.DATABASE_POOL_RECYCLE,
        pool_timeout=30,
    )

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def test_connection() -> bool:
    """Test database connection - NON-BLOCKING."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        safe_url = DATABASE_URL.split("@")[1] if "@" in DATABASE_URL else DATABASE_URL.split("/")[-1]
        logger.info(f"[OK] Database connected: {safe_url}")
        return True
    except Exception as e:
        logger.warning(f"[WARN] Database connection failed: {e}")
        return False


def init_db(bind: Engine = None) -> None:
    """Create all tables if absent. Safe to call on every start."""
    # Import models so they're registered with Base
    from unileave import models  # noqa: F401
    from unileave.db.base import Base

    Base.metadata.create_all(bind=bind or engine)
    logger.info("[OK] Database tables initialized")


def close_db_connection() -> None:
    """Close database connections."""
    engine.dispose()
    logger.info("[OK] Database connections closed")
