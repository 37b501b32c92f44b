"""
Single source of truth for database tables that exist after migrations (001).

Use these names when writing raw SQL (e.g. DELETE in clear scripts).
"""
# All tables that exist in the DB. Must match models and migration 001.
ALL_TABLE_NAMES = (
    "sites",
    "site_contacts",
    "site_facilities",
    "timetable_sessions",
    "timetables",
    "timetable_session_links",
    "timetable_entries",
    "events",
)

# Tables written by one ingest run, in insert order (reverse it to clear).
INGEST_TABLE_NAMES = (
    "sites",
    "site_contacts",
    "site_facilities",
    "timetable_sessions",
    "timetables",
    "timetable_session_links",
    "timetable_entries",
)

# Derived from the ingest tables by the projection; rebuilt each run.
PROJECTION_TABLE_NAMES = ("events",)
