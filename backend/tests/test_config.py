"""Settings parsing from env."""
from swimtimes.config import Settings


def test_site_ids_from_comma_separated_string():
    assert Settings(site_ids="1, 2,,3").site_ids == [1, 2, 3]


def test_site_ids_from_env(monkeypatch):
    monkeypatch.setenv("SITE_IDS", "30,40")

    assert Settings().site_ids == [30, 40]


def test_single_site_id(monkeypatch):
    monkeypatch.setenv("SITE_IDS", "7")

    assert Settings().site_ids == [7]


def test_api_key_is_stripped(monkeypatch):
    monkeypatch.setenv("ACTIVEINTIME_API_KEY", "  abc123\n")

    assert Settings().activeintime_api_key == "abc123"


def test_defaults(monkeypatch):
    monkeypatch.delenv("SITE_IDS", raising=False)
    monkeypatch.delenv("DEFAULT_TIMEZONE", raising=False)

    s = Settings(_env_file=None)

    assert s.site_ids == []
    assert s.default_timezone == "Europe/London"
    assert s.cache_dir.name == "cache"
