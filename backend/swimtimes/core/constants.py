"""
Centralized constants for ingest and the public events projection.

Change windows, cut-offs and name filters here instead of scattering literals across
the pipeline, the projection and the routes.
"""

# Upstream response envelope: every body is {"response": ...}
RESPONSE_ENVELOPE_KEY = "response"

# Entries are fetched in two windows per timetable: from today and from today + 7 days
ENTRY_WINDOW_DAYS = 7
ENTRY_WINDOW_OFFSETS_DAYS = (0, 7)

# Sites with no upstream timezone get this one
DEFAULT_SITE_TIMEZONE = "Europe/London"

# Intensity level: count of this literal escape in the upstream level name
LEVEL_MARKER = "&#x1F9E1"
DEFAULT_LEVEL = 2

# Public events: short, not cancelled, future, and not a swim or closure slot
EVENT_MAX_DURATION_SECONDS = 3600
EXCLUDED_NAME_SUBSTRINGS = ("Swimming", "Closed")

# GET /timetable/entries looks this many days ahead
ENTRIES_LOOKAHEAD_DAYS = 7

# Display formats for the read API
DISPLAY_DATE_FORMAT = "%Y-%m-%d"
DISPLAY_TIME_FORMAT = "%H:%M"
