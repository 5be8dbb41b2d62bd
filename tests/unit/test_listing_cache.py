import pytest

from lms_admin.app.config import TableConfig
from lms_admin.app.listing_cache import ListingCache


class FakeClock:
    def __init__(self) -> None:
        self.value = 100.0

    def __call__(self) -> float:
        return self.value


def test_cache_expires_after_ttl_from_config() -> None:
    clock = FakeClock()
    cache = ListingCache.from_config(TableConfig(cache_ttl_seconds=20), now=clock)
    cache.store("courses", [{"id": "c-1"}])

    clock.value += 19
    assert cache.rows("courses") == [{"id": "c-1"}]

    clock.value += 1
    assert cache.rows("courses") is None
    assert (cache.hits, cache.misses) == (1, 1)


def test_get_or_load_only_calls_loader_on_miss() -> None:
    cache = ListingCache(now=FakeClock())
    calls = []

    def load():
        calls.append("load")
        return [{"id": 1}]

    assert cache.get_or_load("students", load) == [{"id": 1}]
    assert cache.get_or_load("students", load) == [{"id": 1}]
    assert calls == ["load"]


def test_scoped_listings_are_separate_and_invalidate_by_resource() -> None:
    cache = ListingCache(now=FakeClock())
    cache.store("modules", [1], scope="courses:c-1")
    cache.store("modules", [2], scope="courses:c-2")
    cache.store("students", [3])

    cache.invalidate("modules", scope="courses:c-1")
    assert cache.rows("modules", scope="courses:c-1") is None
    assert cache.rows("modules", scope="courses:c-2") == [2]

    cache.invalidate("modules")
    assert cache.rows("modules", scope="courses:c-2") is None
    assert cache.rows("students") == [3]


def test_cached_rows_are_copies() -> None:
    cache = ListingCache(now=FakeClock())
    rows = [{"id": 1}]
    cache.store("answers", rows)
    rows.append({"id": 2})

    cached = cache.rows("answers")
    cached.append({"id": 3})

    assert cache.rows("answers") == [{"id": 1}]


def test_ttl_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ListingCache(ttl_seconds=0)
