"""Test settings for RideHub project.

Uses an in-memory SQLite database, a fast password hasher and a fixed
payment webhook secret so the signed-webhook path can be exercised.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    **STORAGES,  # noqa: F405
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

PAYMENT_WEBHOOK_SECRET = 'test-payment-secret'

RENTAL_REQUIRE_VERIFIED_EMAIL = False
RENTAL_SYNC_VEHICLE_AVAILABILITY = True
