import os

# Mock SECRET_KEY for tests BEFORE importing settings to bypass validation
os.environ.setdefault("SECRET_KEY", "django-insecure-test-key-for-unit-tests-only")

from .settings import *  # noqa: F403

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Keep every hosted backend call in-process
INFRASTRUCTURE["BACKEND_TYPE"] = "memory"  # noqa: F405
INFRASTRUCTURE["REQUIRE_EMAIL_CONFIRMATION"] = False  # noqa: F405

HOSTED_BACKEND["URL"] = "https://test-project.example.com"  # noqa: F405
HOSTED_BACKEND["ANON_KEY"] = "test-anon-key"  # noqa: F405

STOREFRONT["TAX_RATE"] = Decimal("0.10")  # noqa: F405
STOREFRONT["SHIPPING_FLAT_RATE"] = Decimal("10.00")  # noqa: F405

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False
