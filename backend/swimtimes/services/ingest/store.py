"""
Store stages, in dependency order: sites (+ contact, facilities) -> sessions -> timetables
-> entries. Each commit covers one site / one timetable / one batch; an IntegrityError
(e.g. re-running ingest on a populated store) propagates and leaves earlier commits in place.
"""
import logging
from typing import Mapping

from sqlalchemy import insert
from sqlalchemy.orm import Session

from swimtimes.core.constants import DEFAULT_SITE_TIMEZONE
from swimtimes.core.errors import UnknownSessionError
from swimtimes.models import (
    Site,
    SiteContact,
    SiteFacility,
    Timetable,
    TimetableEntry,
    TimetableSession,
    timetable_session_links,
)
from swimtimes.services.activeintime import schemas
from swimtimes.services.ingest.normalize import derive_level, entry_span
from swimtimes.services.ingest.types import (
    EntryStageResult,
    FacilityKey,
    SessionKey,
    SessionStageResult,
    SiteStageResult,
    TimetableStageResult,
    frozen,
)

logger = logging.getLogger(__name__)


def _contact_row(site_id: int, c: schemas.Contact) -> SiteContact:
    return SiteContact(
        site_id=site_id,
        address_line_1=c.address_line_1,
        address_line_2=c.address_line_2,
        post_code=c.post_code,
        post_town=c.post_town,
        country=c.country,
        telephone=c.telephone,
        website=c.website,
        latitude=c.latitude,
        longitude=c.longitude,
    )


def store_sites(db: Session, sites: Mapping[int, schemas.Site]) -> SiteStageResult:
    """Insert each site with its contact and facilities (facilities keyed per site). One commit per site."""
    facility_keys: list[FacilityKey] = []
    for site_id, site in sites.items():
        db.add(
            Site(
                site_id=site_id,
                name=site.name,
                timezone=site.timezone or DEFAULT_SITE_TIMEZONE,
                tldc_approved=site.tldc_approved,
            )
        )
        db.add(_contact_row(site_id, site.contact))
        site_keys: set[FacilityKey] = set()
        for f in site.facilities:
            key = FacilityKey(site_id=site_id, facility_id=f.id)
            if key in site_keys:
                continue
            site_keys.add(key)
            facility_keys.append(key)
            db.add(
                SiteFacility(
                    site_id=key.site_id,
                    facility_id=key.facility_id,
                    name=f.primary_name,
                    length=f.length,
                    tldc_approved=f.tldc_approved,
                )
            )
        db.commit()
        logger.debug("Stored site %s (%s) with %s facilities", site_id, site.name, len(site_keys))
    logger.info("Stored %s site(s), %s facilit(ies)", len(sites), len(facility_keys))
    return SiteStageResult(
        sites=frozen(sites),
        timetable_ids=frozen({sid: tuple(t.id for t in s.timetables) for sid, s in sites.items()}),
        facility_keys=tuple(facility_keys),
    )


def store_sessions(db: Session, session_stage: SessionStageResult) -> int:
    """Bulk insert the de-duplicated sessions, keyed by (first timetable, raw id). One commit."""
    db.add_all(
        TimetableSession(
            timetable_id=key.timetable_id,
            session_id=key.session_id,
            name=s.name,
            category=s.timetable_session_category.name,
            description=s.description,
        )
        for key, s in session_stage.sessions.items()
    )
    db.commit()
    logger.info("Stored %s session(s)", len(session_stage.sessions))
    return len(session_stage.sessions)


def _session_keys_for(
    timetable: schemas.Timetable, session_stage: SessionStageResult
) -> list[SessionKey]:
    """Stored session rows for a timetable's raw session ids, each once."""
    return list(dict.fromkeys(session_stage.keys_by_raw_id[s.id] for s in timetable.timetable_sessions))


def store_timetables(
    db: Session,
    timetable_stage: TimetableStageResult,
    session_stage: SessionStageResult,
) -> int:
    """Insert each timetable under its owning site and link it to its stored sessions. One commit per timetable."""
    for tid, timetable in timetable_stage.timetables.items():
        db.add(Timetable(timetable_id=tid, name=timetable.name, site_id=timetable_stage.owners[tid]))
        db.flush()
        links = [
            {"timetable_id": tid, "session_timetable_id": key.timetable_id, "session_id": key.session_id}
            for key in _session_keys_for(timetable, session_stage)
        ]
        if links:
            db.execute(insert(timetable_session_links), links)
        db.commit()
    logger.info("Stored %s timetable(s)", len(timetable_stage.timetables))
    return len(timetable_stage.timetables)


def entry_row(
    timetable_id: int, entry: schemas.TimetableEntry, session_stage: SessionStageResult
) -> TimetableEntry:
    """Map one validated entry to a row: combined timestamps, derived level, resolved session key."""
    key = session_stage.keys_by_raw_id.get(entry.timetable_session.id)
    if key is None:
        raise UnknownSessionError(timetable_id, entry.timetable_session.id)
    start, end = entry_span(entry.date, entry.start_time, entry.end_time)
    return TimetableEntry(
        entry_id=entry.id,
        timetable_id=timetable_id,
        session_timetable_id=key.timetable_id,
        session_id=key.session_id,
        name=entry.timetable_session.name,
        date_time=start,
        end_time=end,
        facility_name=entry.facility_name,
        instructor_name=entry.instructor.display_name if entry.instructor else "",
        level=derive_level(entry.level.name if entry.level else None),
        is_cancelled=entry.is_cancelled,
    )


def store_entries(db: Session, entry_stage: EntryStageResult, session_stage: SessionStageResult) -> int:
    """Insert every merged entry. One commit per timetable."""
    n = 0
    for tid, entries in entry_stage.entries.items():
        db.add_all(entry_row(tid, e, session_stage) for e in entries)
        db.commit()
        n += len(entries)
    logger.info("Stored %s entr(ies)", n)
    return n
