"""
Payload shapes for the three ActiveInTime bodies the ingest reads: site, timetable and
the timetable entry list. Strict types (no "12" -> 12 coercion); unknown keys ignored.

validate_* wrap pydantic's ValidationError in PayloadValidationError so callers see which
shape failed and where the body came from.
"""
from datetime import date, time
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator

from swimtimes.core.errors import PayloadValidationError


class Payload(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


class IdName(Payload):
    id: int
    name: str


# --- Site ---


class Contact(Payload):
    address_line_1: str
    address_line_2: str
    post_code: str
    post_town: str
    country: str | None
    telephone: str | None
    website: str | None
    latitude: str | None
    longitude: str | None
    twitter: str | None = None
    facebook: str | None = None
    swimmers_guide_id: str | None = None


class FacilityAlias(Payload):
    id: int
    name: str
    is_primary: bool


class Facility(Payload):
    id: int
    primary_name: str
    tldc_approved: bool
    length: float | None
    facility_type: IdName | None = None
    no_of_timetables: int | None = None
    facility_name_aliases: list[FacilityAlias] = []


class Site(Payload):
    id: int
    name: str
    tldc_approved: bool
    timezone: str | None
    foreign_key: str | None = None
    contact: Contact
    facilities: list[Facility]
    timetables: list[IdName]
    management: IdName | None = None
    name_translations: dict[str, Any] = {}


# --- Timetable ---


class TimetableSession(Payload):
    id: int
    name: str
    description: str
    timetable_session_category: IdName
    foreign_key: str | None = None


class Instructor(Payload):
    first_name: str = ""
    last_name: str = ""
    display_name: str


class Timetable(Payload):
    id: int
    name: str
    timetable_sessions: list[TimetableSession]
    facilities: list[Facility]
    levels: list[IdName]
    instructors: list[Instructor] = []


# --- Timetable entries ---


class EntrySessionRef(Payload):
    id: int
    name: str
    foreign_key: str | None = None


class EntryFacilityRef(Payload):
    id: int
    primary_name: str
    length: float | None = None
    facility_type: IdName | None = None


class TimetableEntry(Payload):
    id: int
    start_time: str  # HH:MM[:SS], site local
    end_time: str
    date: str  # YYYY-MM-DD
    day: str | None = None
    facility_name: str
    is_cancelled: bool
    timetable_session: EntrySessionRef
    facility: EntryFacilityRef
    term_type: IdName | None = None
    ttentry_foreign_key: str | None = None
    instructor: Instructor | None = None
    level: IdName | None = None

    @field_validator("date")
    @classmethod
    def iso_date(cls, v: str) -> str:
        date.fromisoformat(v)
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def iso_time(cls, v: str) -> str:
        time.fromisoformat(v)
        return v


_entries_adapter = TypeAdapter(list[TimetableEntry])

M = TypeVar("M", bound=Payload)


def _errors(e: ValidationError) -> list[dict[str, Any]]:
    return [{"loc": err["loc"], "msg": err["msg"], "type": err["type"]} for err in e.errors()]


def _validate_model(model: type[M], shape: str, raw: Any, url: str | None) -> M:
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise PayloadValidationError(shape, url, _errors(e)) from e


def validate_site(raw: Any, url: str | None = None) -> Site:
    return _validate_model(Site, "site", raw, url)


def validate_timetable(raw: Any, url: str | None = None) -> Timetable:
    return _validate_model(Timetable, "timetable", raw, url)


def validate_entries(raw: Any, url: str | None = None) -> list[TimetableEntry]:
    """Validate a timetable_entries body (a JSON array of entries)."""
    try:
        return _entries_adapter.validate_python(raw)
    except ValidationError as e:
        raise PayloadValidationError("timetable_entries", url, _errors(e)) from e
