from .base import *  # noqa

DEBUG = False
PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

ALLOWED_EMBED_ORIGINS = []
PUBLIC_LEADS_RATE_LIMIT_PER_MIN = 0

TWILIO_ACCOUNT_SID = ""
TWILIO_AUTH_TOKEN = ""

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
DEFAULT_FROM_EMAIL = "no-reply@test.local"
