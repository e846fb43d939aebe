"""Application configuration module."""

import os
from datetime import timedelta
from pathlib import Path


class Config:
    """Base configuration for the Flask application."""

    # Core
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
    # No fallback: the application refuses to start without a signing key.
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=10)
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///app.db")
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Files
    PUBLIC_DIR = os.getenv("PUBLIC_DIR", str(Path("public")))
    AVATAR_SIZE = (250, 250)
    MAX_CONTENT_LENGTH = 5 * 1024 * 1024  # 5 MB

    # CORS
    _raw_origins = os.getenv("ORIGINS", "*")
    if _raw_origins.strip() == "*":
        CORS_ORIGINS = "*"
    else:
        CORS_ORIGINS = [o.strip() for o in _raw_origins.split(",") if o.strip()]

    # Mail
    MAIL_SERVER = os.getenv("MAIL_SERVER")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "2525"))
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
    MAIL_USE_TLS = os.getenv("MAIL_USE_TLS", "true").lower() in {"1", "true", "yes"}
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "no-reply@contacts.local")
    BASE_URL = os.getenv("BASE_URL", "http://localhost:5000")

    # Contacts
    CONTACTS_PAGE_LIMIT = int(os.getenv("CONTACTS_PAGE_LIMIT", "20"))
