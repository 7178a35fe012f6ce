import os
from pathlib import Path
from dotenv import load_dotenv
from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent
# Try root project .env (one directory up from BASE_DIR) first, then local
root_env = (BASE_DIR.parent / '.env')
local_env = (BASE_DIR / '.env')
if root_env.exists():
    load_dotenv(root_env)
elif local_env.exists():
    load_dotenv(local_env)

# ---------------------------------------------------------------------------
# SECRET KEY HANDLING
# Prefer DJANGO_SECRET_KEY, fall back to SECRET_KEY. Outside DEBUG a real key
# is required: it signs the session cookie that carries the cart session id.
# ---------------------------------------------------------------------------
_candidate_key = (
    os.getenv('DJANGO_SECRET_KEY')
    or os.getenv('SECRET_KEY')
    or ''
)
SECRET_KEY = _candidate_key if _candidate_key else 'dev-secret-key'
DEBUG = os.getenv('DEBUG', 'True') == 'True'
ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', '*').split(',')

if (not SECRET_KEY or SECRET_KEY == 'dev-secret-key') and not DEBUG:
    raise ImproperlyConfigured(
        'SECRET_KEY is missing or using insecure default. Set DJANGO_SECRET_KEY or SECRET_KEY env var.'
    )

INSTALLED_APPS = [
    'django.contrib.contenttypes',
    'django.contrib.auth',
    'django.contrib.sessions',
    'django.contrib.staticfiles',
    'rest_framework',
    'drf_spectacular',
    'apps.common',
    'apps.api',
    'apps.carts',
    'apps.checkout',
]

REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    # Carts are keyed by client session; login is handled outside this service.
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'UNAUTHENTICATED_USER': None,
    'EXCEPTION_HANDLER': 'apps.api.exceptions.global_exception_handler',
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
}

SPECTACULAR_SETTINGS = {
    'TITLE': 'Marketplace Cart API',
    'DESCRIPTION': 'Session cart for a multi-vendor marketplace with per-vendor checkout.',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
    'COMPONENT_SPLIT_REQUEST': True,
    'SCHEMA_PATH_PREFIX': r'/api',
    'SERVE_PERMISSIONS': [],
}

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'marketplace.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
            ],
        },
    },
]

WSGI_APPLICATION = 'marketplace.wsgi.application'

# Cart state is in-process only; no database is required.
DATABASES = {}

# Signed-cookie sessions keep the cart session id on the client without a DB table.
SESSION_ENGINE = 'django.contrib.sessions.backends.signed_cookies'
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_AGE = int(os.getenv('SESSION_COOKIE_AGE', str(60 * 60 * 24 * 14)))

# ---------------------------------------------------------------------------
# Cart and checkout
# ---------------------------------------------------------------------------
CART_SESSION_KEY = os.getenv('CART_SESSION_KEY', 'cart_session_id')
CHECKOUT_DELIVERY_FEE = os.getenv('CHECKOUT_DELIVERY_FEE', '300')
CHECKOUT_SERVICE_FEE = os.getenv('CHECKOUT_SERVICE_FEE', '25')
# Empty leaves the readiness probe's order API check skipped.
ORDER_API_BASE_URL = os.getenv('ORDER_API_BASE_URL', '')
ORDER_API_TOKEN = os.getenv('ORDER_API_TOKEN', '')
ORDER_API_TIMEOUT = float(os.getenv('ORDER_API_TIMEOUT', '10'))

# ---------------------------------------------------------------------------
# Logging: AppLogger renders bound context into the message, so a plain
# console formatter is enough.
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'console': {
            'format': '%(asctime)s %(levelname)s %(name)s %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'console',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = os.getenv('STATIC_ROOT', str(BASE_DIR / 'staticfiles'))
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
