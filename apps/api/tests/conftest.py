import pytest

from fakes import FakeArchive, FakeClock
from main import app


@pytest.fixture
def fake_archive_factory():
    return FakeArchive


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def reset_app_state():
    """Keep dependency overrides and lazily built caches isolated between tests."""
    previous_cache = getattr(app.state, "query_cache", None)
    yield
    app.dependency_overrides.clear()
    app.state.query_cache = previous_cache
