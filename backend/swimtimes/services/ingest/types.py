"""
Stage results passed between ingest stages. Each is built once, after its stage's
fan-out has joined, and is read-only from then on.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, NamedTuple

from swimtimes.services.activeintime import schemas


class FacilityKey(NamedTuple):
    """Facility ids repeat across sites; a facility is identified within its site."""

    site_id: int
    facility_id: int


class SessionKey(NamedTuple):
    """Session ids repeat across timetables; a session is identified within its timetable."""

    timetable_id: int
    session_id: int


def frozen(d: dict) -> Mapping:
    return MappingProxyType(dict(d))


@dataclass(frozen=True)
class SiteStageResult:
    sites: Mapping[int, schemas.Site]  # site_id -> payload, configured order
    timetable_ids: Mapping[int, tuple[int, ...]]  # site_id -> referenced timetable ids
    facility_keys: tuple[FacilityKey, ...]


@dataclass(frozen=True)
class TimetableStageResult:
    timetables: Mapping[int, schemas.Timetable]  # timetable_id -> payload
    owners: Mapping[int, int]  # timetable_id -> site_id (first site referencing it)


@dataclass(frozen=True)
class SessionStageResult:
    sessions: Mapping[SessionKey, schemas.TimetableSession]  # first occurrence of each raw id
    keys_by_raw_id: Mapping[int, SessionKey]
    duplicates_dropped: int


@dataclass(frozen=True)
class EntryStageResult:
    entries: Mapping[int, tuple[schemas.TimetableEntry, ...]]  # timetable_id -> merged windows
    duplicates_dropped: int


@dataclass(frozen=True)
class IngestSummary:
    sites: int
    facilities: int
    timetables: int
    sessions: int
    sessions_dropped: int
    entries: int
    entries_dropped: int
    cache_hits: int
    cache_misses: int

    def as_dict(self) -> dict[str, int]:
        return {
            "sites": self.sites,
            "facilities": self.facilities,
            "timetables": self.timetables,
            "sessions": self.sessions,
            "sessions_dropped": self.sessions_dropped,
            "entries": self.entries,
            "entries_dropped": self.entries_dropped,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
        }
