"""
Django settings for the SYMX DSP operations console.

Configuration for:
- PostgreSQL
- Redis/Celery (async tasks, daily shipment refresh)
- JWT Authentication (API)
- OpenPhone (SMS) and SeaRates (container tracking)
"""

from pathlib import Path
from decouple import config, Csv
from datetime import timedelta

# ===========================================
# BASE CONFIGURATION
# ===========================================
BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = config('SECRET_KEY', default='dev-secret-key-change-in-production')
DEBUG = config('DEBUG', default=True, cast=bool)
ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1,0.0.0.0', cast=Csv())

# ===========================================
# APPLICATION DEFINITION
# ===========================================
INSTALLED_APPS = [
    # Django Core
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Third Party
    'rest_framework',
    'rest_framework_simplejwt',
    'corsheaders',
    'django_filters',

    # SYMX Apps
    'core.apps.CoreConfig',
    'hr.apps.HrConfig',                # Employees & schedules
    'fleet.apps.FleetConfig',          # Vehicles, repairs, inspections
    'inventory.apps.InventoryConfig',  # Suppliers & categories
    'shipments.apps.ShipmentsConfig',  # PO tracker & container tracking
    'messaging.apps.MessagingConfig',  # SMS to drivers
    'scorecard.apps.ScorecardConfig',  # Weekly performance scorecards
    'reports.apps.ReportsConfig',      # PDF reports

    # API Documentation & Keys
    'drf_spectacular',
    'rest_framework_api_key',
]


MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'core.middleware.RateLimitMiddleware',
    'core.middleware.SecurityHeadersMiddleware',
    'core.middleware.RequestAuditMiddleware',
]

ROOT_URLCONF = 'symx_core.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'symx_core.wsgi.application'

# ===========================================
# DATABASE - PostgreSQL
# ===========================================
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.postgresql',
        'NAME': config('DB_NAME', default='symx_db'),
        'USER': config('DB_USER', default='symx_user'),
        'PASSWORD': config('DB_PASSWORD', default='symx_secret'),
        'HOST': config('DB_HOST', default='db'),
        'PORT': config('DB_PORT', default='5432'),
    }
}

# ===========================================
# CUSTOM USER MODEL
# ===========================================
AUTH_USER_MODEL = 'core.AppUser'

# ===========================================
# PASSWORD VALIDATION
# ===========================================
AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

# ===========================================
# INTERNATIONALIZATION
# ===========================================
LANGUAGE_CODE = 'en-us'
TIME_ZONE = config('TIME_ZONE', default='America/Los_Angeles')
USE_I18N = True
USE_TZ = True

# ===========================================
# STATIC & MEDIA FILES
# ===========================================
STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
MEDIA_URL = 'media/'
MEDIA_ROOT = BASE_DIR / 'media'

# ===========================================
# DEFAULT PRIMARY KEY
# ===========================================
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# ===========================================
# DJANGO REST FRAMEWORK
# ===========================================
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework_simplejwt.authentication.JWTAuthentication',
        'rest_framework.authentication.SessionAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.IsAuthenticated',
    ],
    'DEFAULT_FILTER_BACKENDS': [
        'django_filters.rest_framework.DjangoFilterBackend',
        'rest_framework.filters.SearchFilter',
        'rest_framework.filters.OrderingFilter',
    ],
    'DEFAULT_PAGINATION_CLASS': 'rest_framework.pagination.PageNumberPagination',
    'PAGE_SIZE': 50,
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
}

# ===========================================
# API DOCUMENTATION (drf-spectacular)
# ===========================================
SPECTACULAR_SETTINGS = {
    'TITLE': 'SYMX Console API',
    'DESCRIPTION': 'Operations API for a last-mile Delivery Service Partner',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
}

# ===========================================
# JWT CONFIGURATION
# ===========================================
SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(hours=12),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=7),
    'ROTATE_REFRESH_TOKENS': True,
    'AUTH_HEADER_TYPES': ('Bearer',),
}

# ===========================================
# CORS (Cross-Origin Resource Sharing)
# ===========================================
CORS_ALLOWED_ORIGINS = config(
    'CORS_ALLOWED_ORIGINS',
    default='http://localhost:3000,http://127.0.0.1:3000',
    cast=Csv()
)
CORS_ALLOW_CREDENTIALS = True

# ===========================================
# REDIS & CELERY CONFIGURATION
# ===========================================
REDIS_URL = config('REDIS_URL', default='redis://redis:6379/0')

# Cache
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.redis.RedisCache',
        'LOCATION': REDIS_URL,
    }
}

# Celery
CELERY_BROKER_URL = config('CELERY_BROKER_URL', default='redis://redis:6379/0')
CELERY_RESULT_BACKEND = config('CELERY_RESULT_BACKEND', default='redis://redis:6379/0')
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TASK_SERIALIZER = 'json'
CELERY_RESULT_SERIALIZER = 'json'
CELERY_TIMEZONE = TIME_ZONE

# Celery Beat Schedule (Periodic Tasks)
from celery.schedules import crontab

CELERY_BEAT_SCHEDULE = {
    # Refresh container tracking for in-transit shipments every morning
    'refresh-live-shipments': {
        'task': 'shipments.tasks.refresh_all_shipments',
        'schedule': crontab(hour=9, minute=0),
    },
}

# ===========================================
# SECURITY MIDDLEWARE
# ===========================================
RATE_LIMIT_ENABLED = config('RATE_LIMIT_ENABLED', default=True, cast=bool)
RATE_LIMIT_IN_DEBUG = config('RATE_LIMIT_IN_DEBUG', default=False, cast=bool)

# ===========================================
# EXTERNAL SERVICES
# ===========================================

# -------------------------------------------
# OPENPHONE SMS API
# -------------------------------------------
OPENPHONE_API_URL = config('OPENPHONE_API_URL', default='https://api.openphone.com/v1')
OPENPHONE_API_KEY = config('OPENPHONE_API_KEY', default='')
OPENPHONE_DEFAULT_FROM = config('OPENPHONE_DEFAULT_FROM', default='')
OPENPHONE_TIMEOUT = config('OPENPHONE_TIMEOUT', default=15, cast=int)

# -------------------------------------------
# SEARATES CONTAINER TRACKING API
# -------------------------------------------
SEARATES_API_URL = config('SEARATES_API_URL', default='https://tracking.searates.com/tracking')
SEARATES_API_KEY = config('SEARATES_API_KEY', default='')
SEARATES_TIMEOUT = config('SEARATES_TIMEOUT', default=30, cast=int)

# Shipping line statuses picked up by the daily refresh
SHIPMENT_STATUSES_TO_REFRESH = config(
    'SHIPMENT_STATUSES_TO_REFRESH',
    default='IN_TRANSIT,PLANNED,Booking Confirmed,On Water',
    cast=Csv()
)

# ===========================================
# BUSINESS RULES - SCORECARD
# ===========================================
SCORECARD_IMPORT_BATCH_SIZE = config('SCORECARD_IMPORT_BATCH_SIZE', default=50, cast=int)
DVIC_RUSHED_THRESHOLD_SECONDS = config('DVIC_RUSHED_THRESHOLD_SECONDS', default=90, cast=int)
FLEET_REGISTRATION_WARNING_DAYS = config('FLEET_REGISTRATION_WARNING_DAYS', default=30, cast=int)
SCHEDULE_CONFIRMATION_TTL_HOURS = config('SCHEDULE_CONFIRMATION_TTL_HOURS', default=72, cast=int)

# ===========================================
# LOGGING CONFIGURATION
# ===========================================
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'INFO',
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': config('DJANGO_LOG_LEVEL', default='INFO'),
            'propagate': False,
        },
        'celery': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
    },
}
