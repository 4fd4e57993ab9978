import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttles, role grants and navigation state all live in the cache
    cache.clear()
    yield
    cache.clear()
