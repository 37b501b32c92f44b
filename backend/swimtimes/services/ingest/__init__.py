"""
Ingest: ActiveInTime sites/timetables/entries -> relational store.

- fetch.py: async fan-out + validation per stage
- store.py: inserts in dependency order
- pipeline.py: run_ingest wires the stages together
"""
from swimtimes.services.ingest.fetch import dedupe_sessions, fetch_entries, fetch_sites, fetch_timetables
from swimtimes.services.ingest.pipeline import run_ingest
from swimtimes.services.ingest.store import store_entries, store_sessions, store_sites, store_timetables
from swimtimes.services.ingest.types import (
    EntryStageResult,
    FacilityKey,
    IngestSummary,
    SessionKey,
    SessionStageResult,
    SiteStageResult,
    TimetableStageResult,
)

__all__ = [
    "EntryStageResult",
    "FacilityKey",
    "IngestSummary",
    "SessionKey",
    "SessionStageResult",
    "SiteStageResult",
    "TimetableStageResult",
    "dedupe_sessions",
    "fetch_entries",
    "fetch_sites",
    "fetch_timetables",
    "run_ingest",
    "store_entries",
    "store_sessions",
    "store_sites",
    "store_timetables",
]
