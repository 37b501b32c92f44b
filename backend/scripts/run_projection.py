#!/usr/bin/env python3
"""
Rebuild the public events table from what is already in the store (no fetching).
Run from backend dir:
  python scripts/run_projection.py
  python scripts/run_projection.py --now 2026-10-20T09:00
"""
import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from swimtimes.db.session import SessionLocal
from swimtimes.services.projection import project_events


def main():
    parser = argparse.ArgumentParser(description="Rebuild the events projection")
    parser.add_argument("--now", type=datetime.fromisoformat, default=None, help="Now (ISO); with an offset it is compared in each site's timezone, without one as local time")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)

    now = args.now or datetime.now(timezone.utc)
    db = SessionLocal()
    try:
        n = project_events(db, now)
        print(f"Projected {n} public event(s) as of {now:%Y-%m-%d %H:%M}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
