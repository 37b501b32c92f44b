"""
Ingest run: sites -> timetables -> sessions -> entries. Every stage joins its fan-out
before the next one starts; stages hand over immutable results, not shared maps.
"""
import logging
from datetime import date
from typing import Iterable

from sqlalchemy.orm import Session

from swimtimes.services.activeintime import CachedFetcher
from swimtimes.services.ingest.fetch import dedupe_sessions, fetch_entries, fetch_sites, fetch_timetables
from swimtimes.services.ingest.store import store_entries, store_sessions, store_sites, store_timetables
from swimtimes.services.ingest.types import IngestSummary

logger = logging.getLogger(__name__)


async def run_ingest(
    db: Session,
    fetcher: CachedFetcher,
    site_ids: Iterable[int],
    today: date,
) -> IngestSummary:
    """
    Fetch, validate and store everything reachable from site_ids.
    Fetch/validation errors abort before anything of that stage is written; store errors
    propagate with earlier stages already committed.
    """
    site_ids = list(site_ids)
    logger.info("Ingest starting: %s site(s), entries from %s", len(site_ids), today.isoformat())

    # 1. Sites, contacts, facilities
    site_stage = store_sites(db, await fetch_sites(fetcher, site_ids))

    # 2. Timetables referenced by those sites
    timetable_stage = await fetch_timetables(fetcher, site_stage)

    # 3. Sessions, first occurrence of each raw id
    session_stage = dedupe_sessions(timetable_stage)
    n_sessions = store_sessions(db, session_stage)

    # 4. Timetables linked to their stored sessions
    n_timetables = store_timetables(db, timetable_stage, session_stage)

    # 5. Entries for two 7-day windows per timetable
    entry_stage = await fetch_entries(fetcher, timetable_stage.timetables.keys(), today)

    # 6. Entries with derived level and resolved session
    n_entries = store_entries(db, entry_stage, session_stage)

    summary = IngestSummary(
        sites=len(site_stage.sites),
        facilities=len(site_stage.facility_keys),
        timetables=n_timetables,
        sessions=n_sessions,
        sessions_dropped=session_stage.duplicates_dropped,
        entries=n_entries,
        entries_dropped=entry_stage.duplicates_dropped,
        cache_hits=fetcher.hits,
        cache_misses=fetcher.misses,
    )
    logger.info("Ingest done: %s", summary.as_dict())
    return summary
