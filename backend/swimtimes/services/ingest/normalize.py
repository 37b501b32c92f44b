"""Pure helpers shared by ingest, the events projection and the read API."""
import re
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from swimtimes.core.constants import (
    DEFAULT_LEVEL,
    EVENT_MAX_DURATION_SECONDS,
    EXCLUDED_NAME_SUBSTRINGS,
    LEVEL_MARKER,
)

_TAG_RE = re.compile(r"<[^>]+>")


def derive_level(level_name: str | None) -> int:
    """
    Intensity from the upstream level name: number of LEVEL_MARKER escapes in it.
    No level (or a name that is not text) -> DEFAULT_LEVEL. A level with zero markers is 0.
    """
    if not isinstance(level_name, str):
        return DEFAULT_LEVEL
    return level_name.count(LEVEL_MARKER)


def combine_date_time(date_str: str, time_str: str) -> datetime:
    """'2026-10-20' + '18:30[:00]' -> naive local datetime."""
    return datetime.fromisoformat(f"{date_str}T{time_str}")


def entry_span(date_str: str, start_str: str, end_str: str) -> tuple[datetime, datetime]:
    """Start and end of an entry on date_str. An end before the start falls on the next day."""
    start = combine_date_time(date_str, start_str)
    end = combine_date_time(date_str, end_str)
    if end < start:
        end += timedelta(days=1)
    return start, end


def strip_html(html: str) -> str:
    """Drop every <...> tag. Entities are left as they are."""
    return _TAG_RE.sub("", html or "")


def clean_description(html: str) -> str:
    """&nbsp; -> space, then strip tags. Used for anything shown publicly."""
    return strip_html((html or "").replace("&nbsp;", " "))


def is_public_name(name: str) -> bool:
    """False for swim and closure slots (case-sensitive substring match)."""
    return not any(s in name for s in EXCLUDED_NAME_SUBSTRINGS)


def is_short(start: datetime, end: datetime) -> bool:
    return (end - start).total_seconds() <= EVENT_MAX_DURATION_SECONDS


def wall_clock_now(tz_name: str) -> datetime:
    """Current local time in tz_name, naive (matches how entry times are stored)."""
    return datetime.now(ZoneInfo(tz_name)).replace(tzinfo=None)


def local_now(now: datetime, tz_name: str) -> datetime:
    """
    now as naive wall-clock time in tz_name, for comparing with stored entry times.
    A naive now is taken to be local already and returned unchanged.
    """
    if now.tzinfo is None:
        return now
    return now.astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)
