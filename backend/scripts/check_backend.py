#!/usr/bin/env python3
"""
Quick checks before an ingest run or starting the API. Run from backend/:
  python scripts/check_backend.py
"""
import os
import sys
from pathlib import Path

# Run from backend/
backend_dir = Path(__file__).resolve().parent.parent
os.chdir(backend_dir)
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))


def main():
    errors = []

    # 1) .env
    env_file = backend_dir / ".env"
    if not env_file.exists():
        print("WARN backend/.env missing; using process env and defaults")
    else:
        print("OK  .env exists")

    from swimtimes.config import settings

    # 2) Upstream settings
    if not settings.activeintime_api_key:
        errors.append("ACTIVEINTIME_API_KEY is not set.")
        print("FAIL ACTIVEINTIME_API_KEY")
    else:
        print("OK  ACTIVEINTIME_API_KEY set")
    if not settings.site_ids:
        errors.append("SITE_IDS is empty; nothing to ingest.")
        print("FAIL SITE_IDS")
    else:
        print(f"OK  SITE_IDS: {settings.site_ids}")

    # 3) DB connection and tables
    try:
        from sqlalchemy import inspect, text

        from swimtimes.db.session import engine
        from swimtimes.db.tables import ALL_TABLE_NAMES

        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("OK  Database connection (DATABASE_URL)")
        missing = sorted(set(ALL_TABLE_NAMES) - set(inspect(engine).get_table_names()))
        if missing:
            errors.append(f"Missing tables: {', '.join(missing)}. Run alembic upgrade head or scripts/create_tables.py.")
            print("FAIL Tables missing:", ", ".join(missing))
        else:
            print("OK  All tables present")
    except Exception as e:
        errors.append(f"Database: {e}")
        print("FAIL Database:", e)

    # 4) App import (catches missing deps, bad imports)
    try:
        from swimtimes.main import app  # noqa: F401

        print("OK  App import (swimtimes.main)")
    except Exception as e:
        errors.append(f"App import: {e}")
        print("FAIL App import:", e)

    if errors:
        print("\nFix the above, then run:")
        print("  python scripts/run_ingest.py")
        print("  uvicorn swimtimes.main:app --reload --port 8000")
        return 1
    print("\nAll checks passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
