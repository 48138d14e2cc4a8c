import os

from jeevan_rakth.conf import database_from_url

SECRET_KEY = "test"

DEBUG = False

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "jeevan_rakth",
]

ROOT_URLCONF = "jeevan_rakth.urls"

# PostgreSQL when DATABASE_URL is set (CI), in-memory SQLite otherwise.
DATABASES = {
    "default": database_from_url(os.environ.get("DATABASE_URL", "sqlite://")),
}

CACHES = {
    "default": {"BACKEND": "django.core.cache.backends.locmem.LocMemCache"},
}

JEEVAN_RAKTH = {
    "ALLOW_SIMULATED_FAILURE": True,
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

TIME_ZONE = "UTC"
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
