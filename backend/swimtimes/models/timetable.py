"""
Timetables and their sessions. Session ids are only unique within a timetable, so a
session row is keyed by (timetable_id, session_id) where timetable_id is the timetable
it was first seen in. Sessions are inserted before timetables, so that column is not a
foreign key; the link table carries the timetable <-> session relation.
"""
from sqlalchemy import Column, ForeignKey, ForeignKeyConstraint, Integer, String, Table, Text
from sqlalchemy.orm import relationship

from swimtimes.db.base import Base

timetable_session_links = Table(
    "timetable_session_links",
    Base.metadata,
    Column("timetable_id", Integer, ForeignKey("timetables.timetable_id"), primary_key=True),
    Column("session_timetable_id", Integer, primary_key=True),
    Column("session_id", Integer, primary_key=True),
    ForeignKeyConstraint(
        ["session_timetable_id", "session_id"],
        ["timetable_sessions.timetable_id", "timetable_sessions.session_id"],
    ),
)


class TimetableSession(Base):
    __tablename__ = "timetable_sessions"

    timetable_id = Column(Integer, primary_key=True, autoincrement=False)
    session_id = Column(Integer, primary_key=True, autoincrement=False)  # upstream id
    name = Column(String(256), nullable=False)
    category = Column(String(256), nullable=False)
    description = Column(Text, nullable=False, default="")  # raw upstream HTML

    timetables = relationship("Timetable", secondary=timetable_session_links, back_populates="sessions")
    entries = relationship("TimetableEntry", back_populates="session")


class Timetable(Base):
    __tablename__ = "timetables"

    timetable_id = Column(Integer, primary_key=True, autoincrement=False)  # upstream id
    name = Column(String(256), nullable=False)
    site_id = Column(Integer, ForeignKey("sites.site_id"), nullable=False, index=True)

    site = relationship("Site", back_populates="timetables")
    sessions = relationship("TimetableSession", secondary=timetable_session_links, back_populates="timetables")
    entries = relationship("TimetableEntry", back_populates="timetable")
