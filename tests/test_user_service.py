"""Service-level tests for registration and session races."""

from __future__ import annotations

import pytest

from errors import EmailConflict, Unauthenticated
from models import db
from models.user import User
from services import users
from services.tokens import TokenIdentity


def _create_verified_user(email: str, password: str = "pass1") -> User:
    user = User(email=email, verify=True)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


def test_register_conflict_when_losing_insert_race(app, outbox, monkeypatch):
    """A concurrent insert between the existence check and commit yields 409."""

    with app.app_context():
        _create_verified_user("race@x.com")
        monkeypatch.setattr(users, "_email_taken", lambda email: False)

        with pytest.raises(EmailConflict):
            users.register("Race@x.com", "pass1")

        assert User.query.filter_by(email="race@x.com").count() == 1
        assert outbox == []


def test_logout_with_stale_token_is_rejected(app):
    """Compare-and-clear leaves a newer session alone."""

    with app.app_context():
        _create_verified_user("s@x.com")
        stale, _ = users.login("s@x.com", "pass1")
        current, user = users.login("s@x.com", "pass1")
        identity = TokenIdentity(id=user.id, email=user.email)

        with pytest.raises(Unauthenticated):
            users.logout(identity, stale)
        assert db.session.get(User, user.id).token == current

        users.logout(identity, current)
        assert db.session.get(User, user.id).token is None

        with pytest.raises(Unauthenticated):
            users.logout(identity, current)
