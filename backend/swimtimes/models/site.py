"""Sites, their contact record and their facilities. Facility ids are only unique within a site."""
from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from swimtimes.db.base import Base


class Site(Base):
    __tablename__ = "sites"

    site_id = Column(Integer, primary_key=True, autoincrement=False)  # upstream id
    name = Column(String(256), nullable=False)
    timezone = Column(String(64), nullable=False, default="Europe/London")
    tldc_approved = Column(Boolean, nullable=False, default=False)

    contact = relationship("SiteContact", back_populates="site", uselist=False)
    facilities = relationship("SiteFacility", back_populates="site")
    timetables = relationship("Timetable", back_populates="site")


class SiteContact(Base):
    __tablename__ = "site_contacts"

    site_id = Column(Integer, ForeignKey("sites.site_id"), primary_key=True)
    address_line_1 = Column(String(256), nullable=False)
    address_line_2 = Column(String(256), nullable=False)
    post_code = Column(String(32), nullable=False)
    post_town = Column(String(128), nullable=False)
    country = Column(String(128), nullable=True)
    telephone = Column(String(64), nullable=True)
    website = Column(String(512), nullable=True)
    # Upstream sends coordinates as strings; kept opaque
    latitude = Column(String(32), nullable=True)
    longitude = Column(String(32), nullable=True)

    site = relationship("Site", back_populates="contact")


class SiteFacility(Base):
    __tablename__ = "site_facilities"

    site_id = Column(Integer, ForeignKey("sites.site_id"), primary_key=True)
    facility_id = Column(Integer, primary_key=True, autoincrement=False)  # upstream id, reused across sites
    name = Column(String(256), nullable=False)
    length = Column(Float, nullable=True)
    tldc_approved = Column(Boolean, nullable=False, default=False)

    site = relationship("Site", back_populates="facilities")
