"""Derived tables built from the ingested store."""
from swimtimes.services.projection.events import (
    PublicEntry,
    build_event,
    project_events,
    public_entries,
    upcoming_events,
)

__all__ = ["PublicEntry", "build_event", "project_events", "public_entries", "upcoming_events"]
