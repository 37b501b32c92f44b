"""End-to-end ingest against the fake upstream and an in-memory store."""
import pytest
from sqlalchemy.exc import IntegrityError

from swimtimes.core.errors import FetchError, PayloadValidationError, UnknownSessionError
from swimtimes.models import (
    Event,
    Site,
    SiteFacility,
    Timetable,
    TimetableEntry,
    TimetableSession,
    timetable_session_links,
)
from swimtimes.services.admin_service import clear_store
from swimtimes.services.ingest import run_ingest
from swimtimes.services.projection import project_events
from tests.fakes import NEXT_WEEK, NOW, TODAY, make_entry, make_session, make_site, make_timetable


def serve_timetable(upstream, timetable_id, sessions, this_week=(), next_week=()):
    upstream.timetable(make_timetable(timetable_id, sessions))
    upstream.entries(timetable_id, TODAY, list(this_week))
    upstream.entries(timetable_id, NEXT_WEEK, list(next_week))


async def test_duplicate_session_in_one_timetable_is_stored_once(upstream, fetcher, db):
    upstream.site(make_site(1, timetable_ids=[100]))
    serve_timetable(upstream, 100, [make_session(10), make_session(10)], this_week=[make_entry(1, 10)])

    summary = await run_ingest(db, fetcher, [1], TODAY)

    assert summary.sites == 1
    assert summary.timetables == 1
    assert summary.sessions == 1
    assert summary.sessions_dropped == 1
    assert summary.entries == 1
    assert db.query(TimetableSession).count() == 1
    entry = db.query(TimetableEntry).one()
    assert (entry.session_timetable_id, entry.session_id) == (100, 10)
    assert entry.session.name == "Aqua Aerobics"


async def test_every_request_carries_key_and_user_agent(upstream, fetcher, db):
    upstream.site(make_site(1, timetable_ids=[100]))
    serve_timetable(upstream, 100, [make_session(10)])

    await run_ingest(db, fetcher, [1], TODAY)

    # site, timetable, two entry windows
    assert len(upstream.requests) == 4
    for request in upstream.requests:
        assert request.url.params["key"] == "test-key"
        assert request.headers["user-agent"] == "Mozilla/5.0 test"
    from_dates = sorted(r.url.params["fromDate"] for r in upstream.requests if "fromDate" in r.url.params)
    assert from_dates == ["2030-01-07", "2030-01-14"]


async def test_same_facility_id_at_two_sites_is_two_rows(upstream, fetcher, db):
    upstream.site(make_site(1, facility_ids=[5]))
    upstream.site(make_site(2, facility_ids=[5]))

    summary = await run_ingest(db, fetcher, [1, 2], TODAY)

    assert summary.facilities == 2
    keys = sorted((f.site_id, f.facility_id) for f in db.query(SiteFacility).all())
    assert keys == [(1, 5), (2, 5)]
    assert db.query(Timetable).count() == 0


async def test_site_without_timezone_gets_default(upstream, fetcher, db):
    upstream.site(make_site(1))
    upstream.site(make_site(2, timezone="Europe/Dublin"))

    await run_ingest(db, fetcher, [1, 2], TODAY)

    assert db.get(Site, 1).timezone == "Europe/London"
    assert db.get(Site, 2).timezone == "Europe/Dublin"
    assert db.get(Site, 1).contact.post_code == "EH1 1AA"


async def test_timetable_shared_by_two_sites_belongs_to_the_first(upstream, fetcher, db):
    upstream.site(make_site(1, timetable_ids=[100]))
    upstream.site(make_site(2, timetable_ids=[100]))
    serve_timetable(upstream, 100, [make_session(10)])

    summary = await run_ingest(db, fetcher, [1, 2], TODAY)

    assert summary.timetables == 1
    assert db.get(Timetable, 100).site_id == 1


async def test_session_repeated_in_second_timetable_resolves_to_first(upstream, fetcher, db):
    upstream.site(make_site(1, timetable_ids=[100, 200]))
    serve_timetable(upstream, 100, [make_session(10)])
    serve_timetable(upstream, 200, [make_session(10), make_session(20, name="Spin")], this_week=[make_entry(7, 10)])

    await run_ingest(db, fetcher, [1], TODAY)

    keys = sorted((s.timetable_id, s.session_id) for s in db.query(TimetableSession).all())
    assert keys == [(100, 10), (200, 20)]
    entry = db.get(TimetableEntry, 7)
    assert entry.timetable_id == 200
    assert (entry.session_timetable_id, entry.session_id) == (100, 10)
    links = sorted(tuple(r) for r in db.execute(timetable_session_links.select()).all())
    assert links == [(100, 100, 10), (200, 100, 10), (200, 200, 20)]
    assert {s.name for s in db.get(Timetable, 200).sessions} == {"Aqua Aerobics", "Spin"}


async def test_entry_in_both_windows_is_stored_once(upstream, fetcher, db):
    upstream.site(make_site(1, timetable_ids=[100]))
    serve_timetable(
        upstream,
        100,
        [make_session(10)],
        this_week=[make_entry(1, 10), make_entry(2, 10, day="2030-01-13")],
        next_week=[make_entry(2, 10, day="2030-01-13"), make_entry(3, 10, day="2030-01-15")],
    )

    summary = await run_ingest(db, fetcher, [1], TODAY)

    assert summary.entries == 3
    assert summary.entries_dropped == 1
    assert sorted(e.entry_id for e in db.query(TimetableEntry).all()) == [1, 2, 3]


async def test_entry_fields_are_normalized(upstream, fetcher, db):
    upstream.site(make_site(1, timetable_ids=[100]))
    serve_timetable(
        upstream,
        100,
        [make_session(10)],
        this_week=[
            make_entry(1, 10, start="18:30", end="19:15", level="&#x1F9E1&#x1F9E1&#x1F9E1", instructor="Sam"),
            make_entry(2, 10, is_cancelled=True),
        ],
    )

    await run_ingest(db, fetcher, [1], TODAY)

    first = db.get(TimetableEntry, 1)
    assert first.date_time.isoformat() == "2030-01-08T18:30:00"
    assert first.end_time.isoformat() == "2030-01-08T19:15:00"
    assert first.level == 3
    assert first.instructor_name == "Sam"
    assert first.facility_name == "Main Pool"
    second = db.get(TimetableEntry, 2)
    assert second.level == 2
    assert second.instructor_name == ""
    assert second.is_cancelled is True


async def test_entry_for_unknown_session_aborts(upstream, fetcher, db):
    upstream.site(make_site(1, timetable_ids=[100]))
    serve_timetable(upstream, 100, [make_session(10)], this_week=[make_entry(1, 99)])

    with pytest.raises(UnknownSessionError) as exc:
        await run_ingest(db, fetcher, [1], TODAY)

    assert exc.value.session_id == 99
    assert db.query(TimetableEntry).count() == 0
    assert db.query(Timetable).count() == 1


async def test_timetable_fetch_failure_keeps_stored_sites(upstream, fetcher, db):
    upstream.site(make_site(1, timetable_ids=[100]))
    upstream.fail("/v1/timetables/100.json", status=503)

    with pytest.raises(FetchError) as exc:
        await run_ingest(db, fetcher, [1], TODAY)

    assert exc.value.status_code == 503
    assert db.query(Site).count() == 1
    assert db.query(Timetable).count() == 0


async def test_invalid_site_payload_stores_nothing(upstream, fetcher, db):
    good = make_site(1)
    bad = make_site(2)
    bad["tldc_approved"] = "yes"
    upstream.site(good)
    upstream.site(bad)

    with pytest.raises(PayloadValidationError) as exc:
        await run_ingest(db, fetcher, [1, 2], TODAY)

    assert exc.value.shape == "site"
    assert db.query(Site).count() == 0


async def test_invalid_entries_window_aborts_before_entries(upstream, fetcher, db):
    upstream.site(make_site(1, timetable_ids=[100]))
    upstream.timetable(make_timetable(100, [make_session(10)]))
    upstream.entries(100, TODAY, [make_entry(1, 10)])
    upstream.entries(100, NEXT_WEEK, {"not": "a list"})

    with pytest.raises(PayloadValidationError) as exc:
        await run_ingest(db, fetcher, [1], TODAY)

    assert exc.value.shape == "timetable_entries"
    assert "fromDate=2030-01-14" in exc.value.url
    assert db.query(TimetableEntry).count() == 0


async def test_second_run_on_populated_store_conflicts(upstream, fetcher, session_factory):
    upstream.site(make_site(1, timetable_ids=[100]))
    serve_timetable(upstream, 100, [make_session(10)], this_week=[make_entry(1, 10)])

    first = session_factory()
    try:
        await run_ingest(first, fetcher, [1], TODAY)
    finally:
        first.close()

    second = session_factory()
    try:
        with pytest.raises(IntegrityError):
            await run_ingest(second, fetcher, [1], TODAY)
        second.rollback()
        assert second.query(TimetableEntry).count() == 1
    finally:
        second.close()


async def test_rerun_is_served_from_cache(upstream, fetcher, session_factory, db):
    upstream.site(make_site(1, timetable_ids=[100]))
    serve_timetable(upstream, 100, [make_session(10)], this_week=[make_entry(1, 10)])

    await run_ingest(db, fetcher, [1], TODAY)
    # Drop the store but keep the cache
    clear_store(db)
    db.close()
    fresh = session_factory()
    try:
        summary = await run_ingest(fresh, fetcher, [1], TODAY)
    finally:
        fresh.close()

    assert len(upstream.requests) == 4
    assert summary.cache_hits == 4
    assert summary.cache_misses == 4


async def test_ingest_then_project_keeps_one_public_event(upstream, fetcher, db):
    upstream.site(make_site(1, timetable_ids=[100]))
    serve_timetable(
        upstream,
        100,
        [make_session(10), make_session(10)],
        this_week=[
            make_entry(1, 10),
            make_entry(2, 10, name="Pool Closed"),
            make_entry(3, 10, start="12:00:00", end="13:30:00"),
        ],
    )

    await run_ingest(db, fetcher, [1], TODAY)

    assert project_events(db, NOW) == 1
    assert db.query(TimetableSession).count() == 1
    event = db.query(Event).one()
    assert event.entry_id == 1
    assert event.name == "Aqua Aerobics"
    assert event.description == "Fun in the water"
    assert event.site_name == "Site 1"
    assert event.site_timezone == "Europe/London"


async def test_projection_joins_session_stored_under_another_timetable(upstream, fetcher, db):
    upstream.site(make_site(1, timetable_ids=[100, 200]))
    serve_timetable(upstream, 100, [make_session(10, description="<p>First&nbsp;copy</p>")])
    serve_timetable(
        upstream,
        200,
        [make_session(10, description="<p>Second copy</p>")],
        this_week=[make_entry(4, 10, start="12:00:00", end="12:45:00")],
    )

    await run_ingest(db, fetcher, [1], TODAY)

    assert project_events(db, NOW) == 1
    event = db.query(Event).one()
    assert event.entry_id == 4
    assert event.description == "First copy"


async def test_entry_past_midnight_ends_next_day(upstream, fetcher, db):
    upstream.site(make_site(1, timetable_ids=[100]))
    serve_timetable(
        upstream,
        100,
        [make_session(10)],
        this_week=[
            make_entry(1, 10, name="Late Spin", start="22:00:00", end="01:00:00"),
            make_entry(2, 10, name="Midnight Yoga", start="23:30:00", end="00:15:00"),
        ],
    )

    await run_ingest(db, fetcher, [1], TODAY)

    late = db.get(TimetableEntry, 1)
    assert late.date_time.isoformat() == "2030-01-08T22:00:00"
    assert late.end_time.isoformat() == "2030-01-09T01:00:00"
    assert db.get(TimetableEntry, 2).end_time.isoformat() == "2030-01-09T00:15:00"

    assert project_events(db, NOW) == 1
    assert db.query(Event).one().name == "Midnight Yoga"
