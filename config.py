"""Classes de configuration pour l'application Rent a Cat."""

import os
import tempfile
from datetime import timedelta
from pathlib import Path

basedir = Path(__file__).resolve().parent


class Config:
    """Configuration de base (production)."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-only-insecure-key")
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        f"sqlite:///{basedir / 'data' / 'rentacat.db'}",
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Cookie de session : HttpOnly, SameSite strict, duree de vie 2h
    SESSION_COOKIE_NAME = "sessionId"
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Strict"
    SESSION_COOKIE_SECURE = True
    PERMANENT_SESSION_LIFETIME = timedelta(hours=2)

    # Sessions cote serveur (Flask-Session) : le cookie ne porte que l'identifiant,
    # l'identite et les jetons CSRF restent en base
    SESSION_TYPE = "sqlalchemy"
    SESSION_SQLALCHEMY_TABLE = "sessions"
    SESSION_PERMANENT = True
    SESSION_KEY_PREFIX = "rentacat:"
    SESSION_CLEANUP_N_REQUESTS = 100

    # Jetons CSRF a usage unique (secondes)
    CSRF_TOKEN_TTL = int(os.environ.get("CSRF_TOKEN_TTL", "600"))

    # CORS -- uniquement pour l'API JSON
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "http://localhost:5000").split(",")

    # Limitation de debit
    RATELIMIT_DEFAULT = os.environ.get("RATELIMIT_DEFAULT", "100 per 15 minutes")
    LOGIN_RATE_LIMIT = os.environ.get("LOGIN_RATE_LIMIT", "3 per 30 seconds")

    # Uploads : corps de requete 10 Mo max, images de profil 2 Mo max
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", str(basedir / "data" / "uploads"))
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024
    MAX_IMAGE_SIZE = 2 * 1024 * 1024

    # Compte administrateur cree au demarrage
    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "admin@rentacat.local")
    ADMIN_PASSWORD_HASH = os.environ.get("ADMIN_PASSWORD_HASH", "")

    # Journalisation
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class DevConfig(Config):
    """Configuration de developpement."""

    DEBUG = True
    LOG_LEVEL = "DEBUG"
    SESSION_COOKIE_SECURE = False
    CORS_ORIGINS = ["*"]


class TestConfig(Config):
    """Configuration de test."""

    TESTING = True
    _test_db = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
    SQLALCHEMY_DATABASE_URI = f"sqlite:///{_test_db.name}"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {"check_same_thread": False},
    }
    SESSION_COOKIE_SECURE = False
    UPLOAD_FOLDER = tempfile.mkdtemp(prefix="rentacat-uploads-")
    RATELIMIT_ENABLED = False
    LOG_LEVEL = "DEBUG"


config_by_name = {
    "development": DevConfig,
    "testing": TestConfig,
    "production": Config,
}
