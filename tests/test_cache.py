import json

import pytest
from django.core.cache import caches
from django.urls import reverse
from structlog.testing import capture_logs

from jeevan_rakth import cache as list_cache
from jeevan_rakth.decorators import best_effort

# Decorator tests (DB-free)


def test_best_effort_returns_result_when_call_succeeds():
    @best_effort(event="test_failed")
    def f(x):
        return x + 1

    assert f(41) == 42


def test_best_effort_returns_default_and_logs_on_failure():
    @best_effort(event="test_failed", default="fallback")
    def f():
        raise ConnectionError("down")

    with capture_logs() as logs:
        assert f() == "fallback"

    assert logs[0]["event"] == "test_failed"
    assert logs[0]["log_level"] == "warning"


def test_best_effort_calls_failure_handler_with_arguments():
    seen = []

    def handler(*args, **kwargs):
        seen.append((args, kwargs))
        return "handled"

    @best_effort(event="test_failed", on_failure=handler)
    def f(a, b=None):
        raise RuntimeError("boom")

    assert f(1, b=2) == "handled"
    assert seen == [((1,), {"b": 2})]


# Read-through cache tests (LocMemCache)


def test_list_cache_key_is_order_independent_and_skips_none():
    a = list_cache.list_cache_key("orders", {"take": 10, "skip": 0, "status": None}, 3)
    b = list_cache.list_cache_key("orders", {"skip": 0, "take": 10}, 3)

    assert a == b == "jeevan_rakth:orders:3:skip=0&take=10"


def test_get_or_load_reads_through():
    calls = []

    def loader():
        calls.append(1)
        return {"orders": []}

    assert list_cache.get_or_load("orders", {"skip": 0}, loader) == ({"orders": []}, False)
    assert list_cache.get_or_load("orders", {"skip": 0}, loader) == ({"orders": []}, True)
    assert len(calls) == 1


def test_invalidation_bumps_generation_and_orphans_pages():
    list_cache.get_or_load("orders", {}, lambda: {"v": 1})

    assert list_cache.invalidate_order_lists() is True
    assert list_cache.invalidate_order_lists() is True
    assert caches["default"].get("jeevan_rakth:orders:generation") == 2

    payload, hit = list_cache.get_or_load("orders", {}, lambda: {"v": 2})
    assert (payload, hit) == ({"v": 2}, False)


def test_loader_errors_propagate():
    def loader():
        raise LookupError("db down")

    with pytest.raises(LookupError):
        list_cache.get_or_load("orders", {}, loader)


# Unreachable cache server


@pytest.fixture
def broken_cache(settings):
    settings.CACHES = {
        "default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"},
        "broken": {"BACKEND": "tests.broken_cache.BrokenCache"},
    }
    settings.JEEVAN_RAKTH = {"CACHE_ALIAS": "broken"}


def test_unreachable_cache_degrades_to_miss(broken_cache):
    with capture_logs() as logs:
        payload, hit = list_cache.get_or_load("orders", {}, lambda: {"v": 1})

    assert (payload, hit) == ({"v": 1}, False)
    events = {entry["event"] for entry in logs}
    assert {"order_list_cache_read_failed", "order_list_cache_write_failed"} <= events


def test_unreachable_cache_invalidation_is_dropped(broken_cache):
    with capture_logs() as logs:
        assert list_cache.invalidate_order_lists() is False

    assert logs[0]["event"] == "order_list_cache_invalidation_failed"


def test_orders_survive_an_unreachable_cache(
    broken_cache, client, buyer, make_product, django_capture_on_commit_callbacks
):
    product = make_product(stock=4)

    with django_capture_on_commit_callbacks(execute=True):
        placed = client.post(
            reverse("orders"),
            data=json.dumps({"userId": buyer.pk, "productId": product.pk}),
            content_type="application/json",
        )
    listed = client.get(reverse("orders"))

    assert placed.status_code == 201
    assert listed.status_code == 200
    assert listed["X-Cache"] == "MISS"
    assert listed.json()["meta"]["total"] == 1
