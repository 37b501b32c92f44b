"""Public events: flattened, filtered projection of timetable_entries. Rebuilt after each ingest."""
from sqlalchemy import Column, DateTime, Integer, String, Text

from swimtimes.db.base import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    entry_id = Column(Integer, nullable=False, unique=True)  # timetable_entries.entry_id at projection time
    name = Column(String(256), nullable=False)
    description = Column(Text, nullable=False, default="")  # HTML stripped
    date = Column(DateTime, nullable=False, index=True)  # start
    end_time = Column(DateTime, nullable=False)
    site_name = Column(String(256), nullable=True)
    site_facility = Column(String(256), nullable=True)
    site_timezone = Column(String(64), nullable=False, default="Europe/London")  # date/end_time are local to this zone
    level = Column(Integer, nullable=False)
    instructor = Column(String(256), nullable=False, default="")
