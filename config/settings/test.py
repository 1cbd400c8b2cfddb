"""
Test-specific Django settings.
"""
from config.settings.base import *  # noqa: F401, F403

DEBUG = False
SECRET_KEY = 'movienight-test-secret-key-not-for-production-use'
SIMPLE_JWT = {**SIMPLE_JWT, 'SIGNING_KEY': SECRET_KEY}  # noqa: F405
ALLOWED_HOSTS = ['*']

# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'movienight-test-cache',
    }
}

# ---------------------------------------------------------------------------
# Speed-ups
# ---------------------------------------------------------------------------
PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']
REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # noqa: F405
    'DEFAULT_THROTTLE_CLASSES': [],
}

# ---------------------------------------------------------------------------
# External services
# ---------------------------------------------------------------------------
TMDB_API_KEY = 'test-tmdb-key'
FIREBASE_CREDENTIALS_PATH = ''
MOVIENIGHT_WATCHLIST_ALLOW_DUPLICATES = True
MOVIENIGHT_ENFORCE_INVITE_LIMITS = True

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'WARNING',
    },
}
