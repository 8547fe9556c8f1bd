"""
Test settings: SQLite, in-memory cache, eager Celery.
"""

from .settings import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

RATE_LIMIT_ENABLED = False

OPENPHONE_API_KEY = 'test-openphone-key'
OPENPHONE_DEFAULT_FROM = '+15550000000'
SEARATES_API_KEY = 'test-searates-key'

LOGGING['root']['level'] = 'WARNING'  # noqa: F405
