from .base import *  # noqa
from .base import BASE_DIR
from .base import REST_FRAMEWORK as BASE_REST_FRAMEWORK

# Test settings: force SQLite and in-memory backends for speed and isolation
DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "test_db.sqlite3",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "storefront-tests",
    }
}

# Outgoing mail is collected in django.core.mail.outbox
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

# Plain static storage so tests don't need collectstatic
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

PAYPAL_CLIENT_ID = "test-client"
PAYPAL_APP_SECRET = "test-secret"

# Slightly relax throttling for tests to reduce flakiness
REST_FRAMEWORK = {**BASE_REST_FRAMEWORK}
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {
    **BASE_REST_FRAMEWORK.get("DEFAULT_THROTTLE_RATES", {}),
    "user": "1000/min",
    "anon": "1000/min",
    "cart": "1000/min",
    "cart_write": "1000/min",
    "orders": "1000/min",
    "orders_write": "1000/min",
    "payments_write": "1000/min",
    "reviews_write": "1000/min",
    "signin": "1000/min",
    "signout": "1000/min",
    "profile": "1000/min",
    "catalog": "1000/min",
}
