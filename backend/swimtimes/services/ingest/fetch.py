"""
Fetch stages: fan out over sites / timetables with asyncio.gather, validate every body,
and return a stage result once all tasks have joined. Any fetch or validation error
propagates out of gather and aborts the run.
"""
import asyncio
import logging
from datetime import date, timedelta
from typing import Iterable

from swimtimes.core.constants import ENTRY_WINDOW_DAYS, ENTRY_WINDOW_OFFSETS_DAYS
from swimtimes.services.activeintime import CachedFetcher, schemas
from swimtimes.services.ingest.types import (
    EntryStageResult,
    SessionKey,
    SessionStageResult,
    SiteStageResult,
    TimetableStageResult,
    frozen,
)

logger = logging.getLogger(__name__)


async def _fetch_site(fetcher: CachedFetcher, site_id: int) -> schemas.Site:
    url = fetcher.config.site_url(site_id)
    return schemas.validate_site(await fetcher.get_or_fetch(url), url)


async def _fetch_timetable(fetcher: CachedFetcher, timetable_id: int) -> schemas.Timetable:
    url = fetcher.config.timetable_url(timetable_id)
    return schemas.validate_timetable(await fetcher.get_or_fetch(url), url)


async def _fetch_entry_window(
    fetcher: CachedFetcher, timetable_id: int, from_date: date
) -> list[schemas.TimetableEntry]:
    url = fetcher.config.timetable_entries_url(timetable_id, from_date, ENTRY_WINDOW_DAYS)
    return schemas.validate_entries(await fetcher.get_or_fetch(url), url)


async def fetch_sites(fetcher: CachedFetcher, site_ids: Iterable[int]) -> dict[int, schemas.Site]:
    """Fetch and validate every configured site. Returns site_id -> payload in configured order."""
    ids = list(dict.fromkeys(site_ids))
    payloads = await asyncio.gather(*(_fetch_site(fetcher, sid) for sid in ids))
    logger.info("Fetched %s site(s)", len(payloads))
    return {p.id: p for p in payloads}


async def fetch_timetables(fetcher: CachedFetcher, site_stage: SiteStageResult) -> TimetableStageResult:
    """Fetch every timetable any site references. A timetable is owned by the first site listing it."""
    owners: dict[int, int] = {}
    for site_id, timetable_ids in site_stage.timetable_ids.items():
        for tid in timetable_ids:
            owners.setdefault(tid, site_id)
    ids = list(owners)
    payloads = await asyncio.gather(*(_fetch_timetable(fetcher, tid) for tid in ids))
    timetables = dict(zip(ids, payloads))
    logger.info("Fetched %s timetable(s) for %s site(s)", len(timetables), len(site_stage.sites))
    return TimetableStageResult(timetables=frozen(timetables), owners=frozen(owners))


def dedupe_sessions(timetable_stage: TimetableStageResult) -> SessionStageResult:
    """
    Flatten sessions across timetables (in timetable order) and keep the first occurrence of
    each raw session id, keyed by the timetable it was first seen in. Later duplicates are dropped.
    """
    sessions: dict[SessionKey, schemas.TimetableSession] = {}
    keys_by_raw_id: dict[int, SessionKey] = {}
    dropped = 0
    for tid, timetable in timetable_stage.timetables.items():
        for session in timetable.timetable_sessions:
            if session.id in keys_by_raw_id:
                dropped += 1
                continue
            key = SessionKey(timetable_id=tid, session_id=session.id)
            keys_by_raw_id[session.id] = key
            sessions[key] = session
    if dropped:
        logger.info("Dropped %s duplicate session(s) by raw id", dropped)
    return SessionStageResult(
        sessions=frozen(sessions),
        keys_by_raw_id=frozen(keys_by_raw_id),
        duplicates_dropped=dropped,
    )


async def fetch_entries(fetcher: CachedFetcher, timetable_ids: Iterable[int], today: date) -> EntryStageResult:
    """
    Fetch entries for each timetable in two windows (today and today + 7 days, 7 days each),
    merge them per timetable and drop repeats of an entry id (windows can overlap).
    """
    ids = list(dict.fromkeys(timetable_ids))
    windows = [(tid, today + timedelta(days=offset)) for tid in ids for offset in ENTRY_WINDOW_OFFSETS_DAYS]
    results = await asyncio.gather(*(_fetch_entry_window(fetcher, tid, start) for tid, start in windows))

    merged: dict[int, list[schemas.TimetableEntry]] = {tid: [] for tid in ids}
    seen: dict[int, set[int]] = {tid: set() for tid in ids}
    dropped = 0
    for (tid, _), entries in zip(windows, results):
        for entry in entries:
            if entry.id in seen[tid]:
                dropped += 1
                continue
            seen[tid].add(entry.id)
            merged[tid].append(entry)
    if dropped:
        logger.info("Dropped %s entry repeat(s) across overlapping windows", dropped)
    logger.info(
        "Fetched %s entr(ies) for %s timetable(s)",
        sum(len(v) for v in merged.values()),
        len(ids),
    )
    return EntryStageResult(
        entries=frozen({tid: tuple(v) for tid, v in merged.items()}),
        duplicates_dropped=dropped,
    )
