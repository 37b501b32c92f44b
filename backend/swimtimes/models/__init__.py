from swimtimes.models.event import Event
from swimtimes.models.site import Site, SiteContact, SiteFacility
from swimtimes.models.timetable import Timetable, TimetableSession, timetable_session_links
from swimtimes.models.timetable_entry import TimetableEntry

__all__ = [
    "Event",
    "Site",
    "SiteContact",
    "SiteFacility",
    "Timetable",
    "TimetableEntry",
    "TimetableSession",
    "timetable_session_links",
]
