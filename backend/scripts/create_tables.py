#!/usr/bin/env python3
"""
Create all tables on DATABASE_URL from the models (local SQLite / quick start).
For Postgres prefer migrations: alembic upgrade head
Run from backend dir:
  python scripts/create_tables.py
"""
import sys
from pathlib import Path

backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from swimtimes.config import settings
from swimtimes.db.session import create_tables


def main():
    create_tables()
    print(f"Tables created on {settings.database_url}")


if __name__ == "__main__":
    main()
