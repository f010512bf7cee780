import pytest

from cosmic_atlas.services.cache import MemoryCache
from tests.fakes import FakeUpstream


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def cache():
    return MemoryCache()
