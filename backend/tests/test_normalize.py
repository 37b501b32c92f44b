"""Level derivation, timestamps, HTML stripping and event name rules."""
from datetime import datetime, timezone

from swimtimes.services.ingest.normalize import (
    clean_description,
    combine_date_time,
    derive_level,
    entry_span,
    is_public_name,
    is_short,
    local_now,
    strip_html,
)


def test_level_counts_heart_markers():
    assert derive_level("&#x1F9E1&#x1F9E1") == 2
    assert derive_level("&#x1F9E1&#x1F9E1&#x1F9E1 Hard") == 3


def test_level_present_without_markers_is_zero():
    assert derive_level("Beginner") == 0


def test_level_absent_defaults_to_two():
    assert derive_level(None) == 2


def test_level_is_not_clamped():
    assert derive_level("&#x1F9E1" * 5) == 5


def test_combine_date_time_accepts_with_and_without_seconds():
    assert combine_date_time("2030-01-08", "10:00:00") == datetime(2030, 1, 8, 10, 0)
    assert combine_date_time("2030-01-08", "18:45") == datetime(2030, 1, 8, 18, 45)


def test_strip_html_removes_tags_but_keeps_entities():
    assert strip_html("<p><b>Lane</b> &amp; &#x1F9E1</p>") == "Lane &amp; &#x1F9E1"


def test_clean_description_replaces_nbsp_before_stripping():
    html = '<p><span style="font-size: 11pt;">Lane swimming session.&nbsp; No open water.</span></p>'

    assert clean_description(html) == "Lane swimming session.  No open water."


def test_public_name_excludes_swimming_and_closed_case_sensitively():
    assert not is_public_name("Family Swimming")
    assert not is_public_name("Pool Closed")
    assert is_public_name("Aqua Aerobics")
    assert is_public_name("swimming club")
    assert is_public_name("closed session")


def test_short_means_at_most_one_hour():
    start = datetime(2030, 1, 8, 10, 0)

    assert is_short(start, datetime(2030, 1, 8, 11, 0))
    assert not is_short(start, datetime(2030, 1, 8, 11, 1))


def test_entry_span_rolls_end_past_midnight():
    assert entry_span("2030-01-08", "22:00", "01:00") == (datetime(2030, 1, 8, 22, 0), datetime(2030, 1, 9, 1, 0))
    assert entry_span("2030-01-08", "10:00:00", "10:30:00") == (
        datetime(2030, 1, 8, 10, 0),
        datetime(2030, 1, 8, 10, 30),
    )


def test_local_now_converts_aware_and_keeps_naive():
    aware = datetime(2030, 7, 1, 12, 0, tzinfo=timezone.utc)

    assert local_now(aware, "Europe/London") == datetime(2030, 7, 1, 13, 0)
    assert local_now(aware, "America/New_York") == datetime(2030, 7, 1, 8, 0)
    assert local_now(datetime(2030, 7, 1, 12, 0), "America/New_York") == datetime(2030, 7, 1, 12, 0)
