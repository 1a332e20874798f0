"""TTLCache and logging helper tests"""

import logging

import pytest

from shared.utils import TTLCache, get_logger


class Clock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return Clock()


class TestTTLCache:
    def test_entry_expires(self, clock):
        cache = TTLCache(10, clock=clock)
        cache.set("k", "v")

        assert cache.get("k") == (True, "v")
        clock.now += 10
        assert cache.get("k") == (False, None)
        assert len(cache) == 0

    def test_zero_ttl_disables_caching(self, clock):
        cache = TTLCache(0, clock=clock)
        calls = []

        cache.get_or_load("k", lambda: calls.append(1))
        cache.get_or_load("k", lambda: calls.append(1))

        assert len(calls) == 2

    def test_negative_ttl_rejected(self):
        with pytest.raises(ValueError):
            TTLCache(-1)

    def test_loader_error_not_cached(self, clock):
        cache = TTLCache(10, clock=clock)

        def fail():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            cache.get_or_load("k", fail)
        assert cache.get_or_load("k", lambda: 3) == 3

    def test_invalidate(self, clock):
        cache = TTLCache(10, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)

        cache.invalidate("a")
        assert cache.get("a") == (False, None)
        assert cache.get("b") == (True, 2)

        cache.invalidate()
        assert len(cache) == 0


class TestGetLogger:
    def test_single_handler(self):
        first = get_logger("tests.single_handler")
        second = get_logger("tests.single_handler")

        assert first is second
        assert len(first.handlers) == 1

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert get_logger("tests.env_level").level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        assert get_logger("tests.bad_level").level == logging.INFO
