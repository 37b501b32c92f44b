#!/usr/bin/env python3
"""Clear ingested timetable data and the events projection so ingest can run again.
Run from backend: python scripts/clear_store.py
"""
import sys
from pathlib import Path

# Ensure backend is on path when run as script
backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from swimtimes.db.session import SessionLocal
from swimtimes.services.admin_service import clear_store


def main():
    db = SessionLocal()
    try:
        deleted = clear_store(db)
        print("Store cleared. Rows deleted:")
        for table, count in deleted.items():
            print(f"  {table}: {count}")
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
