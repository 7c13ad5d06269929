import redis

from interview_slots import cache
from interview_slots.cache import FREE_SLOTS_CACHE_KEY, invalidate_free_slots
from tests.fakes import FakeRedis, make_config


def test_skipped_without_redis_host(config):
    assert invalidate_free_slots(config) == "NO_REDIS_HOST"


def test_deletes_free_slot_key(config):
    client = FakeRedis()

    assert invalidate_free_slots(config, client=client) == "INVALIDATED"
    assert client.deleted == [FREE_SLOTS_CACHE_KEY]


def test_delete_error_is_reported_not_raised(config):
    client = FakeRedis(error=redis.ConnectionError("reset"))

    assert invalidate_free_slots(config, client=client) == "REDIS_BYPASS:ConnectionError"


def test_unreachable_redis_is_bypassed(monkeypatch):
    class DownRedis:
        def __init__(self, **kwargs):
            self.kwargs = kwargs

        def ping(self):
            raise redis.TimeoutError("timed out")

        def close(self):
            pass

    monkeypatch.setattr(cache.redis, "Redis", DownRedis)
    config = make_config(redis_host="cache.local")

    assert invalidate_free_slots(config) == "REDIS_BYPASS:TimeoutError"


def test_owned_client_is_closed(monkeypatch):
    opened = []

    class UpRedis(FakeRedis):
        def __init__(self, **kwargs):
            super().__init__()
            self.closed = False
            opened.append(self)

        def ping(self):
            return True

        def close(self):
            self.closed = True

    monkeypatch.setattr(cache.redis, "Redis", UpRedis)

    assert invalidate_free_slots(make_config(redis_host="cache.local")) == "INVALIDATED"
    assert opened[0].deleted == [FREE_SLOTS_CACHE_KEY]
    assert opened[0].closed


def test_client_closed_when_ping_fails(monkeypatch):
    opened = []

    class DownRedis:
        def __init__(self, **kwargs):
            self.closed = False
            opened.append(self)

        def ping(self):
            raise redis.ConnectionError("refused")

        def close(self):
            self.closed = True

    monkeypatch.setattr(cache.redis, "Redis", DownRedis)

    assert invalidate_free_slots(make_config(redis_host="cache.local")) == "REDIS_BYPASS:ConnectionError"
    assert opened[0].closed
