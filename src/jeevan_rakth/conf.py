from __future__ import annotations

from typing import Any
from urllib.parse import urlparse

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

DEFAULTS: dict[str, Any] = {
    "DEFAULT_PAYMENT_PROVIDER": "INTERNAL_LEDGER",
    "ALLOW_SIMULATED_FAILURE": True,
    "CACHE_ALIAS": "default",
    "CACHE_KEY_PREFIX": "jeevan_rakth",
    "ORDER_LIST_CACHE_TTL": 60,
    "ORDER_LIST_DEFAULT_PAGE_SIZE": 10,
    "ORDER_LIST_MAX_PAGE_SIZE": 50,
}


def get_config() -> dict[str, Any]:
    """
    Return the ``JEEVAN_RAKTH`` settings dict merged over the defaults.

    Read on every call so ``override_settings`` takes effect immediately.
    """
    overrides = getattr(settings, "JEEVAN_RAKTH", {}) or {}
    unknown = set(overrides) - set(DEFAULTS)
    if unknown:
        raise ImproperlyConfigured(
            f"JEEVAN_RAKTH: unknown option(s) {sorted(unknown)}. "
            f"Available: {sorted(DEFAULTS)}"
        )
    return {**DEFAULTS, **overrides}


def get_setting(name: str) -> Any:
    return get_config()[name]


def database_from_url(database_url: str) -> dict[str, Any]:
    """
    Build a Django ``DATABASES`` entry from a ``DATABASE_URL``.

    Supports ``postgres://``, ``postgresql://`` and ``sqlite:///path``.
    ``sqlite://`` with no path gives an in-memory database.
    """
    u = urlparse(database_url)

    if u.scheme in {"postgres", "postgresql"}:
        return {
            "ENGINE": "django.db.backends.postgresql",
            "NAME": (u.path or "").lstrip("/"),
            "USER": u.username or "",
            "PASSWORD": u.password or "",
            "HOST": u.hostname or "localhost",
            "PORT": str(u.port or 5432),
            "CONN_MAX_AGE": 0,
        }

    if u.scheme == "sqlite":
        # sqlite:///relative.db -> "relative.db", sqlite:////abs.db -> "/abs.db"
        name = u.path[1:] if u.path.startswith("/") else u.path
        return {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": name or ":memory:",
        }

    raise ImproperlyConfigured(f"Unsupported DATABASE_URL scheme: {u.scheme!r}")
