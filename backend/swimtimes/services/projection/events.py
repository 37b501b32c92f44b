"""
Public events projection: entries that are not cancelled, start at or after now, last at
most an hour and are not swim/closure slots, flattened with site name and a cleaned
description into the events table. Batch rebuild after ingest, not kept in sync.

Entry times are each site's local wall clock. An aware now is converted into every
site's timezone before comparing; a naive now is taken as local to every site.
"""
import logging
from datetime import datetime
from typing import NamedTuple

from sqlalchemy import and_
from sqlalchemy.orm import Session

from swimtimes.models import Event, Site, Timetable, TimetableEntry, TimetableSession
from swimtimes.services.ingest.normalize import clean_description, is_public_name, is_short, local_now

logger = logging.getLogger(__name__)


class PublicEntry(NamedTuple):
    entry: TimetableEntry
    description: str  # raw session HTML
    site_name: str
    site_timezone: str


def _in_window(start: datetime, now: datetime, until: datetime | None, tz_name: str) -> bool:
    if start < local_now(now, tz_name):
        return False
    return until is None or start <= local_now(until, tz_name)


def public_entries(db: Session, now: datetime, until: datetime | None = None) -> list[PublicEntry]:
    """
    Entries eligible for public display, ordered by start. Cancelled entries are filtered
    in SQL, and so are past ones when now is naive. Name, duration and per-site time
    window are checked in Python (SQLite LIKE is case-insensitive).
    """
    q = (
        db.query(TimetableEntry, TimetableSession.description, Site.name, Site.timezone)
        .join(
            TimetableSession,
            and_(
                TimetableSession.timetable_id == TimetableEntry.session_timetable_id,
                TimetableSession.session_id == TimetableEntry.session_id,
            ),
        )
        .join(Timetable, Timetable.timetable_id == TimetableEntry.timetable_id)
        .join(Site, Site.site_id == Timetable.site_id)
        .filter(TimetableEntry.is_cancelled.is_(False))
    )
    if now.tzinfo is None:
        q = q.filter(TimetableEntry.date_time >= now)
    rows = q.order_by(TimetableEntry.date_time, TimetableEntry.entry_id).all()
    return [
        PublicEntry(entry, description or "", site_name, tz_name)
        for entry, description, site_name, tz_name in rows
        if _in_window(entry.date_time, now, until, tz_name)
        and is_public_name(entry.name)
        and is_short(entry.date_time, entry.end_time)
    ]


def build_event(p: PublicEntry) -> Event:
    e = p.entry
    return Event(
        entry_id=e.entry_id,
        name=e.name,
        description=clean_description(p.description),
        date=e.date_time,
        end_time=e.end_time,
        site_name=p.site_name,
        site_facility=e.facility_name,
        site_timezone=p.site_timezone,
        level=e.level,
        instructor=e.instructor_name or "",
    )


def upcoming_events(db: Session, now: datetime) -> list[Event]:
    """Projected events starting at or after now in their site's local time, soonest first."""
    rows = db.query(Event).order_by(Event.date, Event.entry_id).all()
    return [e for e in rows if e.date >= local_now(now, e.site_timezone)]


def project_events(db: Session, now: datetime) -> int:
    """Replace the events table with the public entries as of now. One commit. Returns rows written."""
    events = [build_event(p) for p in public_entries(db, now)]
    try:
        removed = db.query(Event).delete(synchronize_session=False)
        db.add_all(events)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Projected %s event(s) (replaced %s) as of %s", len(events), removed, now.isoformat())
    return len(events)
