"""Tests covering registration, login and session handling."""

from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from models import db
from models.user import User


def _verification_token(message) -> str:
    return message.text.rsplit("/", 1)[-1]


def _register(client: FlaskClient, email: str, password: str):
    return client.post("/users/register", json={"email": email, "password": password})


def _register_verified(client: FlaskClient, outbox: list, email: str, password: str) -> None:
    response = _register(client, email, password)
    assert response.status_code == 201
    token = _verification_token(outbox[-1])
    assert client.get(f"/users/verify/{token}").status_code == 200


def _login(client: FlaskClient, email: str, password: str) -> str:
    response = client.post("/users/login", json={"email": email, "password": password})
    assert response.status_code == 200
    return response.get_json()["token"]


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_register_returns_public_projection(client, outbox):
    """Registration returns only the public fields and mails a verification link."""

    response = _register(client, "New@X.com", "pass1")

    assert response.status_code == 201
    assert response.get_json() == {
        "user": {"email": "new@x.com", "subscription": "starter", "avatarURL": None}
    }
    assert len(outbox) == 1
    assert outbox[0].to == "new@x.com"
    assert "http://testserver/users/verify/" in outbox[0].text


@pytest.mark.parametrize("second_email", ["dup@x.com", "DUP@x.com", "  Dup@X.Com "])
def test_duplicate_registration_conflicts(app, client, outbox, second_email):
    """An email registered in any casing cannot be registered again."""

    assert _register(client, "dup@x.com", "pass1").status_code == 201

    response = _register(client, second_email, "other")

    assert response.status_code == 409
    assert response.get_json()["message"] == "Email in use"
    with app.app_context():
        assert User.query.filter_by(email="dup@x.com").count() == 1


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "a@x.com"},
        {"password": "pass1"},
        {"email": "not-an-email", "password": "pass1"},
        {"email": "a@x.com", "password": "abc"},
        {"email": "a@x.com", "password": "pass1", "role": "admin"},
    ],
)
def test_register_validation(client, outbox, payload):
    """Register endpoint should validate request bodies."""

    response = client.post("/users/register", json=payload)

    assert response.status_code == 400
    assert response.get_json()["message"]
    assert outbox == []


def test_login_requires_verified_email(client, outbox):
    """Correct credentials on an unverified account do not yield a token."""

    _register(client, "a@x.com", "pass1")

    response = client.post("/users/login", json={"email": "a@x.com", "password": "pass1"})

    assert response.status_code == 401
    assert response.get_json()["message"] == "Please verify your email"
    assert "token" not in response.get_json()


def test_wrong_credentials_are_undifferentiated(client, outbox):
    """Unknown email and wrong password produce the same response."""

    _register_verified(client, outbox, "a@x.com", "pass1")

    wrong_password = client.post("/users/login", json={"email": "a@x.com", "password": "nope1"})
    unknown_email = client.post("/users/login", json={"email": "b@x.com", "password": "pass1"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.get_json()["message"] == "Email or password is wrong"
    assert unknown_email.get_json()["message"] == "Email or password is wrong"


def test_login_stores_session_token(app, client, outbox):
    """Users should receive a token that is also stored on their record."""

    _register_verified(client, outbox, "a@x.com", "pass1")

    response = client.post("/users/login", json={"email": "A@X.com", "password": "pass1"})

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["user"] == {"email": "a@x.com", "subscription": "starter"}
    with app.app_context():
        assert User.query.filter_by(email="a@x.com").one().token == payload["token"]


def test_current_user(client, outbox):
    """The current endpoint returns the caller's profile."""

    _register_verified(client, outbox, "a@x.com", "pass1")
    token = _login(client, "a@x.com", "pass1")

    response = client.get("/users/current", headers=_auth(token))

    assert response.status_code == 200
    assert response.get_json() == {"email": "a@x.com", "subscription": "starter"}


def test_logout_revokes_unexpired_token(app, client, outbox):
    """After logout the old token is rejected everywhere."""

    _register_verified(client, outbox, "a@x.com", "pass1")
    token = _login(client, "a@x.com", "pass1")

    response = client.post("/users/logout", headers=_auth(token))
    assert response.status_code == 204
    assert response.get_data() == b""

    with app.app_context():
        assert User.query.filter_by(email="a@x.com").one().token is None

    assert client.get("/users/current", headers=_auth(token)).status_code == 401
    assert client.get("/api/contacts", headers=_auth(token)).status_code == 401
    assert client.post("/users/logout", headers=_auth(token)).status_code == 401


def test_relogin_invalidates_previous_token(client, outbox):
    """Only the most recently issued token authenticates."""

    _register_verified(client, outbox, "a@x.com", "pass1")
    first = _login(client, "a@x.com", "pass1")
    second = _login(client, "a@x.com", "pass1")

    assert first != second
    assert client.get("/users/current", headers=_auth(first)).status_code == 401
    assert client.get("/users/current", headers=_auth(second)).status_code == 200


@pytest.mark.parametrize(
    "header",
    [
        None,
        "",
        "Bearer",
        "Bearer ",
        "Token abc",
        "bearer {token}",
        "Bearer {token} extra",
        "Bearer not-a-jwt",
    ],
)
def test_malformed_authorization_is_rejected(client, outbox, header):
    """Anything but an exact Bearer header is rejected with 401."""

    _register_verified(client, outbox, "a@x.com", "pass1")
    token = _login(client, "a@x.com", "pass1")

    headers = {} if header is None else {"Authorization": header.format(token=token)}
    response = client.get("/users/current", headers=headers)

    assert response.status_code == 401
    assert response.get_json()["message"] == "Not authorized"


def test_token_for_deleted_user_is_rejected(app, client, outbox):
    _register_verified(client, outbox, "a@x.com", "pass1")
    token = _login(client, "a@x.com", "pass1")

    with app.app_context():
        db.session.delete(User.query.filter_by(email="a@x.com").one())
        db.session.commit()

    assert client.get("/users/current", headers=_auth(token)).status_code == 401


def test_update_subscription(client, outbox):
    """Subscription changes accept only known tiers."""

    _register_verified(client, outbox, "a@x.com", "pass1")
    token = _login(client, "a@x.com", "pass1")

    response = client.post("/users/", json={"subscription": "pro"}, headers=_auth(token))
    assert response.status_code == 200
    assert response.get_json() == {"email": "a@x.com", "subscription": "pro"}

    invalid = client.post("/users/", json={"subscription": "gold"}, headers=_auth(token))
    assert invalid.status_code == 400

    unauthenticated = client.post("/users/", json={"subscription": "pro"})
    assert unauthenticated.status_code == 401
