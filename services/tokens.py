"""Signed, time-limited session tokens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from flask import Flask, current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

DEFAULT_TTL = timedelta(hours=10)


@dataclass(frozen=True)
class TokenIdentity:
    """The identity a session token was issued for."""

    id: int
    email: str


class SessionTokenCodec:
    """Issue and verify bearer tokens binding a user id and email.

    Tokens are plain JWTs signed with ``JWT_SECRET_KEY``. Verification here is
    purely cryptographic; revocation is handled by comparing against the token
    stored on the user row (see ``utils.auth``).
    """

    def __init__(self, app: Flask | None = None) -> None:
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        if not app.config.get("JWT_SECRET_KEY"):
            raise RuntimeError("JWT_SECRET_KEY must be set before the application starts.")
        app.config.setdefault("JWT_ACCESS_TOKEN_EXPIRES", DEFAULT_TTL)
        app.extensions["session_token_codec"] = self

    def issue(self, user_id: int, email: str, ttl: timedelta | None = None) -> str:
        """Return a signed token carrying ``sub``, ``email``, ``iat`` and ``exp``."""

        expires_delta = ttl if ttl is not None else current_app.config["JWT_ACCESS_TOKEN_EXPIRES"]
        return create_access_token(
            identity=str(user_id),
            additional_claims={"email": email},
            expires_delta=expires_delta,
        )

    def verify(self, token: str) -> TokenIdentity | None:
        """Return the embedded identity, or None for any invalid token."""

        if not token:
            return None
        try:
            claims = decode_token(token)
        except (PyJWTError, JWTExtendedException):
            return None

        if claims.get("type") != "access":
            return None
        email = claims.get("email")
        if not isinstance(email, str):
            return None
        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError):
            return None
        return TokenIdentity(id=user_id, email=email)


def get_codec() -> SessionTokenCodec:
    return current_app.extensions["session_token_codec"]
