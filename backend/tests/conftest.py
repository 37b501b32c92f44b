"""Pytest fixtures: in-memory store and a cached fetcher wired to the fake upstream."""
import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from swimtimes.db.session import create_tables, make_engine
from swimtimes.services.activeintime import ActiveInTimeClient, ActiveInTimeConfig, CachedFetcher, ResponseCache
from tests.fakes import API_KEY, BASE_URL, FakeActiveInTime


@pytest.fixture
def upstream():
    return FakeActiveInTime()


@pytest.fixture
def api_config():
    return ActiveInTimeConfig(api_key=API_KEY, base_url=BASE_URL, user_agent="Mozilla/5.0 test")


@pytest.fixture
async def client(upstream, api_config):
    c = ActiveInTimeClient(api_config, transport=upstream.transport())
    yield c
    await c.aclose()


@pytest.fixture
def cache(tmp_path):
    return ResponseCache(tmp_path / "cache")


@pytest.fixture
def fetcher(client, cache):
    return CachedFetcher(client, cache)


# --- Store ---


@pytest.fixture
def engine():
    eng = make_engine("sqlite://", poolclass=StaticPool)
    create_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()
