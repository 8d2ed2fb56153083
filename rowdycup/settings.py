import os
import structlog
import sys

from corsheaders.defaults import default_headers
from dotenv import load_dotenv


BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
LOG_DIR = os.path.join(BASE_DIR, 'var/log')

if not os.path.exists(LOG_DIR):
    os.makedirs(LOG_DIR)

# Load Environment variables, defaulting to prod, where
# we don't inject DJANGO_ENV.
DJANGO_ENV = os.getenv("DJANGO_ENV", "prod")
ENVIRONMENTS = {
  "local": ".env.local",
  "docker": ".env.docker",
}

sys.stdout.write(f"Loading environment {DJANGO_ENV}\n")
dotenv_path = os.path.join(BASE_DIR, "config", ENVIRONMENTS.get(DJANGO_ENV) or ".env")

sys.stdout.write(f"Loading environment variables from {dotenv_path}\n")
load_dotenv(dotenv_path)


def to_bool(value):
    return str(value).lower() == "true"


# Secrets
SECRET_KEY = os.getenv("SECRET_KEY", "rowdy-cup-insecure-local-key")

# Other common settings that vary by environment
ALLOWED_HOSTS = ["localhost", "127.0.0.1", "testserver"]
allowed_hosts = os.getenv("ALLOWED_HOSTS")
if allowed_hosts is not None:
  ALLOWED_HOSTS = list(allowed_hosts.split(","))

trusted_origins = os.getenv("CSRF_TRUSTED_ORIGINS")
if trusted_origins is not None:
  CSRF_TRUSTED_ORIGINS = list(trusted_origins.split(","))

allowed_origins = os.getenv("CORS_ALLOWED_ORIGINS")
if allowed_origins is not None:
  CORS_ALLOWED_ORIGINS = list(allowed_origins.split(","))

CORS_ALLOW_HEADERS = (
    *default_headers,
    "x-correlation-id",
)

DEBUG = to_bool(os.getenv("DEBUG", "False"))
SECURE_SSL_REDIRECT = to_bool(os.getenv("SECURE_SSL_REDIRECT", "False"))
SESSION_COOKIE_SECURE = to_bool(os.getenv("SESSION_COOKIE_SECURE", "False"))
CSRF_COOKIE_SECURE = to_bool(os.getenv("CSRF_COOKIE_SECURE", "False"))
CORS_ALLOW_CREDENTIALS = True

# Common settings
DEFAULT_AUTO_FIELD = 'django.db.models.AutoField'

ROOT_URLCONF = "rowdycup.urls"

WSGI_APPLICATION = "rowdycup.wsgi.application"

LANGUAGE_CODE = "en-us"

TIME_ZONE = "America/Chicago"

USE_I18N = False

USE_TZ = True

STATIC_URL = "/static/"

INSTALLED_APPS = (
    "corsheaders",
    "django.contrib.contenttypes",
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "django_structlog",
    "rest_framework",
    "rest_framework.authtoken",
    "core",
    "courses",
    "register",
    "events",
    "scores",
)

MIDDLEWARE = (
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "django_structlog.middlewares.RequestMiddleware",
)

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

REST_FRAMEWORK = {
    "DEFAULT_PERMISSION_CLASSES": ("rest_framework.permissions.IsAuthenticatedOrReadOnly",),
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "rest_framework.authentication.TokenAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ),
    "EXCEPTION_HANDLER": "core.exception_handler.custom_exception_handler",
}

# Logging
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json_formatter": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processor": structlog.processors.JSONRenderer(),
        },
        "plain_console": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processor": structlog.dev.ConsoleRenderer(),
        },
        "key_value": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processor": structlog.processors.KeyValueRenderer(key_order=['timestamp', 'level', 'event', 'logger']),
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "plain_console",
        },
        "flat_line_file": {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "filename": LOG_DIR + "/rowdycup.log",
            "when": "W5",
            "backupCount": 12,
            "formatter": "key_value",
        },
    },
    "loggers": {
        "django_structlog": {
            "handlers": ["console", "flat_line_file"],
            "level": "ERROR",
        },
        "core": {
            "handlers": ["console", "flat_line_file"],
            "level": "INFO",
        },
        "courses": {
            "handlers": ["console", "flat_line_file"],
            "level": "INFO",
        },
        "events": {
            "handlers": ["console", "flat_line_file"],
            "level": "INFO",
        },
        "register": {
            "handlers": ["console", "flat_line_file"],
            "level": "INFO",
        },
        "scores": {
            "handlers": ["console", "flat_line_file"],
            "level": "INFO",
        },
    }
}

structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

# Database
DATABASES = {
    'default': {
        'ENGINE': os.getenv("DATABASE_ENGINE", "django.db.backends.sqlite3"),
        'NAME': os.getenv("DATABASE_NAME", os.path.join(BASE_DIR, "db.sqlite3")),
        'USER': os.getenv("DATABASE_USER", ""),
        'PASSWORD': os.getenv("DATABASE_PASSWORD", ""),
        'HOST': os.getenv("DATABASE_HOST", ""),
        'PORT': os.getenv("DATABASE_PORT", ""),
    }
}

# Match play
BEST_BALL_FORMAT_MARKER = "Best Ball"
