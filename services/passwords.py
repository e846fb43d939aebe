"""Salted one-way password hashing."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(password: str) -> str:
    """Return a salted hash; the salt and method are embedded in the result."""

    return generate_password_hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    """Compare ``password`` against ``password_hash`` in constant time.

    Malformed or empty hashes never raise, they simply do not match.
    """

    if not password_hash:
        return False
    try:
        return check_password_hash(password_hash, password)
    except (ValueError, TypeError):
        return False
