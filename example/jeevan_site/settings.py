"""
Settings for the example project.

Run with: python example/manage.py migrate && python example/manage.py runserver
"""

import os
from pathlib import Path

from jeevan_rakth.conf import database_from_url
from jeevan_rakth.log import configure_logging

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-jeevan-rakth-example")

DEBUG = os.environ.get("DJANGO_DEBUG", "false").lower() in {"1", "true", "yes"}

ALLOWED_HOSTS = ["*"]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "jeevan_rakth",
]

MIDDLEWARE = [
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "jeevan_site.urls"

DATABASES = {
    "default": database_from_url(
        os.environ.get("DATABASE_URL", f"sqlite:///{BASE_DIR / 'db.sqlite3'}")
    ),
}

REDIS_URL = os.environ.get("REDIS_URL")

CACHES = {
    "default": (
        {"BACKEND": "django.core.cache.backends.redis.RedisCache", "LOCATION": REDIS_URL}
        if REDIS_URL
        else {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"}
    ),
}

JEEVAN_RAKTH = {
    "ORDER_LIST_CACHE_TTL": int(os.environ.get("REDIS_TTL_SECONDS", "60")),
    "ALLOW_SIMULATED_FAILURE": os.environ.get("ALLOW_SIMULATED_FAILURE", "true").lower()
    in {"1", "true", "yes"},
}

# Logging is configured by structlog, not by Django's dictConfig.
LOGGING_CONFIG = None
configure_logging(os.environ.get("LOG_LEVEL", "INFO"), json_output=not DEBUG)

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
