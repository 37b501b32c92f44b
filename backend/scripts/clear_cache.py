#!/usr/bin/env python3
"""
Delete every cached ActiveInTime response so the next ingest refetches.
Run from backend dir:
  python scripts/clear_cache.py
"""
import sys
from pathlib import Path

backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from swimtimes.config import settings
from swimtimes.services.activeintime import ResponseCache


def main():
    n = ResponseCache(settings.cache_dir).clear()
    print(f"Removed {n} cached response(s) from {settings.cache_dir}")


if __name__ == "__main__":
    main()
