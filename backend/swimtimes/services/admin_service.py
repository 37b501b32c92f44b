"""
Admin: clear ingested data so a fresh ingest run does not hit duplicate keys.
Tables: see swimtimes.db.tables (cleared in reverse insert order, projection first).
"""
import logging

from sqlalchemy.orm import Session

from swimtimes.models import (
    Event,
    Site,
    SiteContact,
    SiteFacility,
    Timetable,
    TimetableEntry,
    TimetableSession,
    timetable_session_links,
)

logger = logging.getLogger(__name__)


def clear_store(db: Session) -> dict[str, int]:
    """
    Delete all rows from the projection and ingest tables. Returns table -> deleted count.
    One commit; on failure nothing is deleted.
    """
    deleted: dict[str, int] = {}
    try:
        deleted["events"] = db.query(Event).delete(synchronize_session=False)
        deleted["timetable_entries"] = db.query(TimetableEntry).delete(synchronize_session=False)
        deleted["timetable_session_links"] = db.execute(timetable_session_links.delete()).rowcount
        deleted["timetables"] = db.query(Timetable).delete(synchronize_session=False)
        deleted["timetable_sessions"] = db.query(TimetableSession).delete(synchronize_session=False)
        deleted["site_facilities"] = db.query(SiteFacility).delete(synchronize_session=False)
        deleted["site_contacts"] = db.query(SiteContact).delete(synchronize_session=False)
        deleted["sites"] = db.query(Site).delete(synchronize_session=False)
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("clear_store failed")
        raise
    logger.info("clear_store: %s", deleted)
    return deleted
