from .base import *  # noqa: F403
from .base import env

# GENERAL
# ------------------------------------------------------------------------------
# https://docs.djangoproject.com/en/dev/ref/settings/#debug
DEBUG = True
# https://docs.djangoproject.com/en/dev/ref/settings/#secret-key
SECRET_KEY = env(
    "DJANGO_SECRET_KEY",
    default="q1Jm0zc4lQd8lV5aP2nNwC9Rk7XyT3bHs6uEoLiGfD0aZvKpYtWrQeSx8mBnJh4",
)
# https://docs.djangoproject.com/en/dev/ref/settings/#allowed-hosts
ALLOWED_HOSTS = ["localhost", "0.0.0.0", "127.0.0.1"]  # noqa: S104

# The React dev server runs on 3001 while the API listens on 3000/8000.
CORS_ALLOWED_ORIGINS = ["http://localhost:3000", "http://localhost:3001"]
SOCKETIO_CORS_ALLOWED_ORIGINS = CORS_ALLOWED_ORIGINS

# LOGGING
# ------------------------------------------------------------------------------
LOGGING["loggers"]["audioroad"]["level"] = "DEBUG"  # noqa: F405
