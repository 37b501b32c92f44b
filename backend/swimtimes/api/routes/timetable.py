"""
Timetable read API for the data table UI: public events, upcoming entries, sites.

All routes are mounted under /timetable. Read-only; the store is written by scripts/run_ingest.py.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from swimtimes.core.constants import DISPLAY_DATE_FORMAT, DISPLAY_TIME_FORMAT, ENTRIES_LOOKAHEAD_DAYS
from swimtimes.core.errors import store_error_to_http
from swimtimes.db.session import get_db
from swimtimes.models import Site
from swimtimes.services.ingest.normalize import clean_description
from swimtimes.services.projection import public_entries, upcoming_events

router = APIRouter()
logger = logging.getLogger(__name__)


def get_now() -> datetime:
    """Aware now; routes compare it in each site's timezone. Overridden in tests."""
    return datetime.now(timezone.utc)


def _date(dt: datetime) -> str:
    return dt.strftime(DISPLAY_DATE_FORMAT)


def _time(dt: datetime) -> str:
    return dt.strftime(DISPLAY_TIME_FORMAT)


@router.get("/sites")
def list_sites(db: Session = Depends(get_db)) -> dict[str, Any]:
    """Sites present in the store (ingested from SITE_IDS)."""
    try:
        rows = db.query(Site).order_by(Site.name).all()
    except SQLAlchemyError as e:
        logger.warning("list_sites failed: %s", e, exc_info=True)
        raise store_error_to_http(e) from e
    return {"sites": [{"site_id": s.site_id, "name": s.name, "timezone": s.timezone} for s in rows]}


@router.get("/events")
def list_events(db: Session = Depends(get_db), now: datetime = Depends(get_now)) -> dict[str, Any]:
    """Projected public events starting from now (site local time), soonest first."""
    try:
        rows = upcoming_events(db, now)
    except SQLAlchemyError as e:
        logger.warning("list_events failed: %s", e, exc_info=True)
        raise store_error_to_http(e) from e
    return {
        "events": [
            {
                "event_name": r.name,
                "description": r.description,
                "date": _date(r.date),
                "time": _time(r.date),
                "end_time": _time(r.end_time),
                "site_name": r.site_name,
                "site_facility": r.site_facility,
                "level": r.level,
                "instructor": r.instructor,
            }
            for r in rows
        ]
    }


@router.get("/entries")
def list_entries(db: Session = Depends(get_db), now: datetime = Depends(get_now)) -> dict[str, Any]:
    """
    Raw entries for the next ENTRIES_LOOKAHEAD_DAYS, same eligibility as the events projection
    (not cancelled, at most an hour, no swim/closure slots), read straight from timetable_entries.
    """
    until = now + timedelta(days=ENTRIES_LOOKAHEAD_DAYS)
    try:
        rows = public_entries(db, now, until)
    except SQLAlchemyError as e:
        logger.warning("list_entries failed: %s", e, exc_info=True)
        raise store_error_to_http(e) from e
    return {
        "entries": [
            {
                "name": p.entry.name,
                "description": clean_description(p.description),
                "date": _date(p.entry.date_time),
                "time": _time(p.entry.date_time),
                "end_time": _time(p.entry.end_time),
                "site": {"name": p.site_name, "facility": p.entry.facility_name},
                "level": p.entry.level,
                "instructor": p.entry.instructor_name,
            }
            for p in rows
        ]
    }
