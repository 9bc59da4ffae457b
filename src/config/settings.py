"""Django settings for route optimizer project."""

from __future__ import annotations

import os

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "change-me-in-production")
DEBUG = os.getenv("DJANGO_DEBUG", "1") == "1"
ALLOWED_HOSTS = [host for host in os.getenv("DJANGO_ALLOWED_HOSTS", "").split(",") if host]

INSTALLED_APPS = [
    "route_optimizer",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

WSGI_APPLICATION = "config.wsgi.application"

# Optimization runs are stateless; nothing is persisted.
DATABASES: dict[str, dict] = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "route_optimizer": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}

GENETIC_POPULATION_SIZE = int(os.getenv("GENETIC_POPULATION_SIZE", "100"))
GENETIC_GENERATIONS = int(os.getenv("GENETIC_GENERATIONS", "1000"))
MAX_WAYPOINTS = int(os.getenv("MAX_WAYPOINTS", "100"))

_random_seed = os.getenv("OPTIMIZER_RANDOM_SEED", "")
OPTIMIZER_RANDOM_SEED = int(_random_seed) if _random_seed else None
