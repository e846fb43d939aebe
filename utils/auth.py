"""Bearer-token authentication for protected routes."""

from __future__ import annotations

from functools import wraps

from flask import g, request

from errors import Unauthenticated
from models import db
from models.user import User
from services.tokens import TokenIdentity, get_codec


def _extract_bearer_token(header: str | None) -> str:
    if not header:
        raise Unauthenticated()
    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise Unauthenticated()
    return parts[1]


def authenticate_request() -> TokenIdentity:
    """Resolve the request's bearer token to the identity it was issued for.

    The token must verify cryptographically and also be the exact token stored
    on the user, so logging out or logging in again revokes older tokens.
    """

    token = _extract_bearer_token(request.headers.get("Authorization"))

    identity = get_codec().verify(token)
    if identity is None:
        raise Unauthenticated()

    user = db.session.get(User, identity.id)
    if user is None or user.token != token:
        raise Unauthenticated()

    g.current_user = identity
    g.session_token = token
    return identity


def auth_required(view):
    """Reject the request with 401 unless it carries a live session token."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        authenticate_request()
        return view(*args, **kwargs)

    return wrapper


def current_identity() -> TokenIdentity:
    identity = g.get("current_user")
    if identity is None:
        raise Unauthenticated()
    return identity
