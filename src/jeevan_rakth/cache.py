"""
Read-through cache for list endpoints.

Pages are stored in the Django cache configured under
``JEEVAN_RAKTH["CACHE_ALIAS"]`` (Redis in deployments). Every key embeds a
per-namespace generation number; invalidation bumps the generation so all
cached pages of that namespace become unreachable at once and age out through
their TTL.

Cache failures never reach the caller. Reads degrade to a miss, writes and
invalidations are dropped, and each failure is logged.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping
from urllib.parse import urlencode

import structlog
from django.core.cache import caches

from .conf import get_setting
from .decorators import best_effort

logger = structlog.get_logger(__name__)

ORDERS_NAMESPACE = "orders"


def _cache():
    return caches[get_setting("CACHE_ALIAS")]


def _generation_key(namespace: str) -> str:
    return f"{get_setting('CACHE_KEY_PREFIX')}:{namespace}:generation"


def list_cache_key(namespace: str, params: Mapping[str, Any], generation: int) -> str:
    """
    Build the cache key of one list page.

    Parameters are sorted and dropped when ``None`` so equivalent queries
    share a key regardless of argument order.
    """
    query = urlencode(sorted((k, v) for k, v in params.items() if v is not None))
    return f"{get_setting('CACHE_KEY_PREFIX')}:{namespace}:{generation}:{query}"


@best_effort(event="order_list_cache_read_failed", default=0)
def _current_generation(namespace: str) -> int:
    return _cache().get(_generation_key(namespace), 0)


@best_effort(event="order_list_cache_read_failed")
def _read(key: str) -> Any:
    return _cache().get(key)


@best_effort(event="order_list_cache_write_failed", default=False)
def _write(key: str, value: Any) -> bool:
    _cache().set(key, value, get_setting("ORDER_LIST_CACHE_TTL"))
    return True


def get_or_load(
    namespace: str,
    params: Mapping[str, Any],
    loader: Callable[[], Any],
) -> tuple[Any, bool]:
    """
    Return ``(payload, hit)`` for a list page.

    On a miss ``loader`` is called and its result stored. Exceptions raised by
    ``loader`` propagate; only cache failures are absorbed.
    """
    key = list_cache_key(namespace, params, _current_generation(namespace))

    cached = _read(key)
    if cached is not None:
        return cached, True

    payload = loader()
    _write(key, payload)
    return payload, False


@best_effort(event="order_list_cache_invalidation_failed", default=False)
def invalidate_lists(namespace: str) -> bool:
    cache = _cache()
    key = _generation_key(namespace)

    try:
        cache.incr(key)
    except ValueError:
        # No generation stored yet (first write, or evicted).
        if not cache.add(key, 1, timeout=None):
            cache.incr(key)

    logger.info("order_list_cache_invalidated", namespace=namespace)
    return True


def invalidate_order_lists() -> bool:
    return invalidate_lists(ORDERS_NAMESPACE)
