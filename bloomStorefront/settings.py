"""
Django settings for the bloomStorefront project.

All catalog, cart and account data lives in the hosted backend; Django's own
database only holds framework state (sessions).
"""

import os
from decimal import Decimal
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent


def env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


DEBUG = env_bool("DEBUG", False)

SECRET_KEY = os.environ.get("SECRET_KEY")
if not SECRET_KEY:
    if DEBUG:
        SECRET_KEY = "django-insecure-local-development-key"
    else:
        raise ImproperlyConfigured("SECRET_KEY environment variable is required when DEBUG is off")

ALLOWED_HOSTS = [host.strip() for host in os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if host]

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "authentication",
    "storefront",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "bloomStorefront.middleware.BearerCSRFBypassMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "bloomStorefront.middleware.HostedSessionMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "bloomStorefront.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
                "storefront.context_processors.storefront",
            ],
        },
    },
]

WSGI_APPLICATION = "bloomStorefront.wsgi.application"
ASGI_APPLICATION = "bloomStorefront.asgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("SESSION_DB_PATH", BASE_DIR / "db.sqlite3"),
    }
}

SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_SECURE = env_bool("SESSION_COOKIE_SECURE", not DEBUG)
CSRF_COOKIE_SECURE = env_bool("CSRF_COOKIE_SECURE", not DEBUG)

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LOGIN_URL = "authentication:auth"

# Hosted auth users are stored in the session as JSON
SESSION_SERIALIZER = "django.contrib.sessions.serializers.JSONSerializer"

# ==============================================================================
# HOSTED BACKEND
# ==============================================================================

HOSTED_BACKEND = {
    "URL": os.environ.get("HOSTED_BACKEND_URL", os.environ.get("SUPABASE_URL", "")),
    "ANON_KEY": os.environ.get("HOSTED_BACKEND_ANON_KEY", os.environ.get("SUPABASE_ANON_KEY", "")),
    # Only used by management commands that write catalog data
    "SERVICE_KEY": os.environ.get("HOSTED_BACKEND_SERVICE_KEY", ""),
    "TIMEOUT": float(os.environ.get("HOSTED_BACKEND_TIMEOUT", "10")),
}

INFRASTRUCTURE = {
    # 'postgrest' talks to the hosted project, 'memory' keeps everything in-process
    "BACKEND_TYPE": os.environ.get("BACKEND_TYPE", "postgrest"),
    "REQUIRE_EMAIL_CONFIRMATION": env_bool("REQUIRE_EMAIL_CONFIRMATION", False),
}

# ==============================================================================
# STOREFRONT
# ==============================================================================

STOREFRONT = {
    "BRAND_NAME": "Bloom",
    "TAX_RATE": Decimal(os.environ.get("STOREFRONT_TAX_RATE", "0.10")),
    "SHIPPING_FLAT_RATE": Decimal(os.environ.get("STOREFRONT_SHIPPING_FLAT_RATE", "10.00")),
    "CURRENCY": "USD",
    "PLACEHOLDER_IMAGE": "https://placehold.co/600x800?text=Bloom",
}

# ==============================================================================
# REST FRAMEWORK
# ==============================================================================

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "authentication.api.authentication.HostedBackendTokenAuthentication",
        "authentication.api.authentication.HostedSessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "UNAUTHENTICATED_USER": "django.contrib.auth.models.AnonymousUser",
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Bloom Storefront API",
    "DESCRIPTION": "Catalog, cart, checkout and authentication for the Bloom storefront",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
}

# ==============================================================================
# LOGGING
# ==============================================================================

LOG_LEVEL = os.environ.get("STOREFRONT_LOG_LEVEL", "DEBUG" if DEBUG else "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {name} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
        "storefront": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "authentication": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "infrastructure": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}
