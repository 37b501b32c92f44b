from swimtimes.db.base import Base
from swimtimes.db.session import SessionLocal, create_tables, engine, get_db
from swimtimes.db.tables import ALL_TABLE_NAMES, INGEST_TABLE_NAMES, PROJECTION_TABLE_NAMES

__all__ = [
    "get_db",
    "engine",
    "SessionLocal",
    "Base",
    "create_tables",
    "ALL_TABLE_NAMES",
    "INGEST_TABLE_NAMES",
    "PROJECTION_TABLE_NAMES",
]
