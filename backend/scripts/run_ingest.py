#!/usr/bin/env python3
"""
Ingest ActiveInTime sites/timetables/entries into the store, then rebuild public events.
Run from backend dir:
  python scripts/run_ingest.py                    # SITE_IDS from .env
  python scripts/run_ingest.py --site-id 123 --site-id 456 --no-project
Re-running against a populated store fails on duplicate keys; clear it first
(scripts/clear_store.py). Cached responses live in CACHE_DIR; scripts/clear_cache.py refetches.
"""
import argparse
import asyncio
import logging
import sys
from datetime import date, datetime, timezone
from pathlib import Path

backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from swimtimes.config import settings
from swimtimes.db.session import SessionLocal
from swimtimes.services.activeintime import ActiveInTimeClient, ActiveInTimeConfig, CachedFetcher, ResponseCache
from swimtimes.services.ingest import run_ingest
from swimtimes.services.ingest.normalize import wall_clock_now
from swimtimes.services.projection import project_events

logger = logging.getLogger("run_ingest")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ingest ActiveInTime timetables and project public events")
    parser.add_argument("--site-id", dest="site_ids", type=int, action="append", help="Site id (repeatable); default SITE_IDS")
    parser.add_argument("--today", type=date.fromisoformat, default=None, help="First entry window date (YYYY-MM-DD)")
    parser.add_argument("--cache-dir", type=Path, default=None, help="Response cache directory; default CACHE_DIR")
    parser.add_argument("--no-project", action="store_true", help="Skip rebuilding the events table")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    site_ids = args.site_ids or settings.site_ids
    if not site_ids:
        logger.error("No sites to ingest. Set SITE_IDS in .env or pass --site-id.")
        return 2
    config = ActiveInTimeConfig()
    if not config.is_configured():
        logger.error("ActiveInTime API key not configured. Add ACTIVEINTIME_API_KEY to .env.")
        return 2
    today = args.today or wall_clock_now(settings.default_timezone).date()
    cache = ResponseCache(args.cache_dir or settings.cache_dir)

    db = SessionLocal()
    try:
        async with ActiveInTimeClient(config) as client:
            summary = await run_ingest(db, CachedFetcher(client, cache), site_ids, today)
        print(f"Ingested: {summary.as_dict()}")
        if not args.no_project:
            now = datetime.now(timezone.utc)
            n = project_events(db, now)
            print(f"Projected {n} public event(s) as of {now:%Y-%m-%d %H:%M %Z}")
    except Exception:
        logger.exception("Ingest failed")
        return 1
    finally:
        db.close()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
