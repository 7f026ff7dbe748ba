import pytest
import redis
from rest_framework.test import APIClient

from core.common import ratelimit
from core.common.exceptions import api_exception_handler
from core.common.ratelimit import RateLimitExceeded, rate_limit_or_raise


class FakePipeline:
    def __init__(self, store):
        self.store = store
        self.ops = []

    def incr(self, key, amount):
        self.ops.append(("incr", key, amount))

    def ttl(self, key):
        self.ops.append(("ttl", key))

    def execute(self):
        out = []
        for op in self.ops:
            if op[0] == "incr":
                self.store["count"] = self.store.get("count", 0) + op[2]
                out.append(self.store["count"])
            else:
                out.append(self.store.get("ttl", -1))
        return out


class FakeRedis:
    def __init__(self):
        self.store = {}

    def pipeline(self):
        return FakePipeline(self.store)

    def expire(self, key, seconds):
        self.store["ttl"] = seconds


def test_rate_limit_allows_up_to_limit(monkeypatch):
    fake = FakeRedis()
    monkeypatch.setattr(ratelimit, "_redis", lambda: fake)

    rate_limit_or_raise(key="k", limit=2, window_seconds=60)
    rate_limit_or_raise(key="k", limit=2, window_seconds=60)
    with pytest.raises(RateLimitExceeded) as exc:
        rate_limit_or_raise(key="k", limit=2, window_seconds=60)
    assert exc.value.retry_after_seconds == 60


def test_rate_limit_disabled_at_zero(monkeypatch):
    def fail():
        raise AssertionError("redis should not be touched")

    monkeypatch.setattr(ratelimit, "_redis", fail)
    rate_limit_or_raise(key="k", limit=0, window_seconds=60)


def test_rate_limit_fails_open(monkeypatch):
    class Down:
        def pipeline(self):
            raise redis.ConnectionError("down")

    monkeypatch.setattr(ratelimit, "_redis", lambda: Down())
    rate_limit_or_raise(key="k", limit=1, window_seconds=60)


def test_unhandled_exception_becomes_generic_500():
    response = api_exception_handler(RuntimeError("secret detail"), {})
    assert response.status_code == 500
    assert response.data == {"error": "Internal server error", "code": "INTERNAL_ERROR"}


@pytest.mark.django_db
def test_invalid_tenant_segment_rejected():
    r = APIClient().get("/api/Not_A_Slug/leads")
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid tenant", "code": "TENANT_INVALID"}


@pytest.mark.django_db
def test_unknown_route_is_json_404():
    r = APIClient().get("/nowhere/")
    assert r.status_code == 404


@pytest.mark.django_db
def test_health_reports_db(monkeypatch):
    class Down:
        def ping(self):
            raise redis.ConnectionError("down")

    monkeypatch.setattr(redis.Redis, "from_url", lambda *a, **kw: Down())
    r = APIClient().get("/health/")
    assert r.status_code == 200
    assert r.json() == {"db": True, "redis": False}
