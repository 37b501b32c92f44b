"""
Database session and engine.
"""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from swimtimes.config import settings
from swimtimes.db.base import Base


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores FOREIGN KEY constraints unless asked per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(database_url: str, **kwargs) -> Engine:
    """Engine for database_url. Pool tuning applies to server databases only (not SQLite)."""
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        eng = create_engine(database_url, **kwargs)
        event.listen(eng, "connect", _enable_sqlite_foreign_keys)
        return eng
    return create_engine(
        database_url,
        pool_size=kwargs.pop("pool_size", 8),
        max_overflow=kwargs.pop("max_overflow", 10),
        pool_pre_ping=True,
        pool_recycle=300,
        pool_timeout=30,
        **kwargs,
    )


engine = make_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables(bind: Engine | None = None) -> None:
    """Create every model table that does not exist yet (local SQLite, tests). Server DBs use Alembic."""
    import swimtimes.models  # noqa: F401  (registers tables on Base.metadata)

    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
