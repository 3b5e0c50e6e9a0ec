# Build paths inside the project like this: os.path.join(BASE_DIR, ...)
import os

import sentry_sdk
from sentry_sdk.integrations.django import DjangoIntegration
from django.core.exceptions import ImproperlyConfigured
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "SECRET_KEY", "k3v!o+2h$w9zr0bq@7y&u5x1p^lcg6e*_fjd8s4n-ma=ti")

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.environ.get("DEBUG") in ["1", "true", "True"]

ALLOWED_HOSTS = ["*"]

# Application definition

INSTALLED_APPS = ("django.contrib.admin", "django.contrib.auth",
                  "django.contrib.contenttypes", "django.contrib.sessions",
                  "django.contrib.messages", "django.contrib.staticfiles",
                  "obozy.apps.camps", "obozy.apps.registration",
                  "bootstrap4",)

MIDDLEWARE = (
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "obozy.apps.camps.middleware.SessionContextMiddleware",
    "obozy.apps.camps.middleware.AdminRouteGuard",
)

ROOT_URLCONF = "obozy.urls"

WSGI_APPLICATION = "obozy.wsgi.application"

MYSQL_HOST = os.environ.get("MYSQL_HOST")

if MYSQL_HOST:
    DB_OPTIONS = {"charset": "utf8mb4"}
    SSL_CA = os.environ.get("MYSQL_SSL_CA")
    if SSL_CA:
        if not os.path.exists(SSL_CA):
            raise ImproperlyConfigured(
                f"Configured MYSQL_SSL_CA path '{SSL_CA}' could not be found."
            )
        DB_OPTIONS["ssl"] = {"ca": SSL_CA}

    DATABASES = {
        "default": {
            "ENGINE":   "django.db.backends.mysql",
            "OPTIONS":  DB_OPTIONS,
            "NAME":     os.environ.get("MYSQL_DATABASE", "obozy"),
            "USER":     os.environ.get("MYSQL_USER", "root"),
            "PASSWORD": os.environ.get("MYSQL_PASSWORD", ""),
            "HOST":     MYSQL_HOST,
            "PORT":     os.environ.get("MYSQL_PORT", "3306"),
            "CONN_MAX_AGE": 60,
        }
    }
else:
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": os.path.join(BASE_DIR, "obozy.sqlite3"),
        }
    }

# Object storage for registration cards and homepage images
STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "local")
if STORAGE_BACKEND not in ("local", "S3"):
    raise ImproperlyConfigured(
        f"STORAGE_BACKEND must be 'local' or 'S3', got '{STORAGE_BACKEND}'"
    )

STORAGE = {
    "use_s3": STORAGE_BACKEND == "S3",
    "prefix": os.environ.get("STORAGE_BUCKET_PREFIX", ""),
    "s3_endpoint": os.environ.get("STORAGE_S3_ENDPOINT"),
    "public_url": os.environ.get("STORAGE_PUBLIC_URL"),
}

MEDIA_URL = "/media/"
MEDIA_ROOT = os.environ.get("MEDIA_ROOT", os.path.join(BASE_DIR, "media"))

# Error monitoring
# https://docs.sentry.io/platforms/python/integrations/django/
if os.environ.get("SENTRY_DSN"):
    sentry_sdk.init(
        dsn=os.environ["SENTRY_DSN"],
        integrations=[DjangoIntegration()],
        traces_sample_rate=1.0,
        send_default_pii=True,
        )

# Internationalization

LANGUAGE_CODE = "pl"

TIME_ZONE = "Europe/Warsaw"

USE_I18N = True

USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = os.path.join(BASE_DIR, "staticfiles")

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [
            os.path.join(BASE_DIR, "obozy", "templates"),
        ],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.contrib.auth.context_processors.auth",
                "django.template.context_processors.debug",
                "django.template.context_processors.i18n",
                "django.template.context_processors.media",
                "django.contrib.messages.context_processors.messages",
                "django.template.context_processors.request",
            ],
        },
    },
]

MESSAGE_STORAGE = "django.contrib.messages.storage.session.SessionStorage"

# Login/Logout redirects
LOGIN_REDIRECT_URL = "/admin/"
LOGIN_URL = "/login/"

AUTHENTICATION_BACKENDS = (
    "obozy.apps.camps.auth_backends.EmailAuthenticationBackend",
)

PORTAL_DEFAULTS_YAML_PATH = os.path.join(BASE_DIR, "obozy", "portal_defaults.yaml")

# Bank account printed on payment reminders
PAYMENT_ACCOUNT_NUMBER = os.environ.get(
    "PAYMENT_ACCOUNT_NUMBER", "12 3456 7890 1234 5678 9012 3456")

# Query cache tuning, in seconds
QUERY_STALE_TIME = int(os.environ.get("QUERY_STALE_TIME", 300))
QUERY_CACHE_TIME = int(os.environ.get("QUERY_CACHE_TIME", 3600))

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    },
}

# Query results and admin lookups are shared by every worker through memcached,
# local memory is only good enough for a single process in development or CI
if os.environ.get("OBOZY_ENV") not in [
    "development", None] and not os.environ.get("CI"):
    CACHES["queries"] = {
        "BACKEND": "django.core.cache.backends.memcached.PyMemcacheCache",
        "LOCATION": os.environ.get("MEMCACHED_LOCATION", "127.0.0.1:11211"),
        "KEY_PREFIX": "obozy-queries",
        "TIMEOUT": QUERY_STALE_TIME,
    }
else:
    CACHES["queries"] = {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "obozy-queries",
        "TIMEOUT": QUERY_STALE_TIME,
    }

DEFAULT_AUTO_FIELD = "django.db.models.AutoField"

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
        "obozy": {
            "level": os.environ.get("OBOZY_LOG_LEVEL", "INFO"),
        },
    },
    "root": {
        "handlers": ["console"],
    }
}

if os.environ.get("OBOZY_LOG_QUERIES"):
    LOGGING["loggers"]["django.db.backends"] = {"level": "DEBUG"}
