"""Shared pytest fixtures for the application tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app import create_app  # noqa: E402
from config import Config  # noqa: E402
from models import db  # noqa: E402


class _BaseTestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JWT_SECRET_KEY = "test-signing-key-that-is-long-enough-for-hs256"
    MAIL_SERVER = None
    BASE_URL = "http://testserver"
    CORS_ORIGINS = "*"


@pytest.fixture()
def app(tmp_path) -> Flask:
    """Create a Flask application instance for tests."""

    public_dir = tmp_path / "public"

    class TestConfig(_BaseTestConfig):
        PUBLIC_DIR = str(public_dir)

    application = create_app(TestConfig)

    with application.app_context():
        db.create_all()

    yield application

    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Return a test client for the Flask app."""

    return app.test_client()


@pytest.fixture()
def outbox(app: Flask, monkeypatch) -> list:
    """Capture outgoing mail instead of handing it to the transport."""

    sent = []

    def _record(message):
        sent.append(message)
        return True

    monkeypatch.setattr(app.extensions["mailer"], "send_mail", _record)
    return sent

