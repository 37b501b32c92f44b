"""Services: ActiveInTime fetch, ingest pipeline, projections."""
