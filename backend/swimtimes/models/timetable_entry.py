"""One scheduled occurrence of a session. Start/end are the site's local wall-clock times."""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, ForeignKeyConstraint, Integer, String
from sqlalchemy.orm import relationship

from swimtimes.db.base import Base


class TimetableEntry(Base):
    __tablename__ = "timetable_entries"

    entry_id = Column(Integer, primary_key=True, autoincrement=False)  # upstream id
    timetable_id = Column(Integer, ForeignKey("timetables.timetable_id"), nullable=False, index=True)
    session_timetable_id = Column(Integer, nullable=False)
    session_id = Column(Integer, nullable=False)
    name = Column(String(256), nullable=False)
    date_time = Column(DateTime, nullable=False, index=True)  # start
    end_time = Column(DateTime, nullable=False)
    facility_name = Column(String(256), nullable=False)  # denormalized, not a facility FK
    instructor_name = Column(String(256), nullable=False, default="")
    level = Column(Integer, nullable=False, default=2)
    is_cancelled = Column(Boolean, nullable=False, default=False)

    timetable = relationship("Timetable", back_populates="entries")
    session = relationship("TimetableSession", back_populates="entries")

    __table_args__ = (
        ForeignKeyConstraint(
            ["session_timetable_id", "session_id"],
            ["timetable_sessions.timetable_id", "timetable_sessions.session_id"],
        ),
    )
