"""Registration, login and session lifecycle for users."""

from __future__ import annotations

from flask import current_app
from sqlalchemy.exc import IntegrityError

from errors import EmailConflict, EmailNotVerified, InvalidCredentials, Unauthenticated
from models import db
from models.user import User
from services.tokens import TokenIdentity, get_codec
from services.verification import issue_verification


def normalize_email(raw_email: str | None) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""
    return (raw_email or "").strip().lower()


def _email_taken(email: str) -> bool:
    return User.query.filter_by(email=email).first() is not None


def register(email: str, password: str) -> User:
    """Create an unverified user and send the verification link."""

    email = normalize_email(email)
    if _email_taken(email):
        raise EmailConflict()

    user = User(email=email)
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        db.session.rollback()
        raise EmailConflict()

    issue_verification(user)
    current_app.logger.info("Registered user %s", user.id)
    return user


def login(email: str, password: str) -> tuple[str, User]:
    """Check credentials and store a freshly issued session token."""

    user = User.query.filter_by(email=normalize_email(email)).first()
    if user is None or not user.check_password(password):
        raise InvalidCredentials()
    if not user.verify:
        raise EmailNotVerified()

    token = get_codec().issue(user.id, user.email)
    User.query.filter_by(id=user.id).update(
        {User.token: token}, synchronize_session=False
    )
    db.session.commit()
    current_app.logger.info("User %s logged in", user.id)
    return token, user


def logout(identity: TokenIdentity, token: str) -> None:
    """Clear the stored session token if it is still the presented one."""

    cleared = User.query.filter_by(id=identity.id, token=token).update(
        {User.token: None}, synchronize_session=False
    )
    db.session.commit()
    if not cleared:
        raise Unauthenticated()
    current_app.logger.info("User %s logged out", identity.id)


def get_user(identity: TokenIdentity) -> User:
    user = db.session.get(User, identity.id)
    if user is None:
        raise Unauthenticated()
    return user


def update_subscription(identity: TokenIdentity, subscription: str) -> User:
    updated = User.query.filter_by(id=identity.id).update(
        {User.subscription: subscription}, synchronize_session=False
    )
    db.session.commit()
    if not updated:
        raise Unauthenticated()
    return get_user(identity)


def update_avatar(identity: TokenIdentity, avatar_url: str) -> User:
    updated = User.query.filter_by(id=identity.id).update(
        {User.avatar_url: avatar_url}, synchronize_session=False
    )
    db.session.commit()
    if not updated:
        raise Unauthenticated()
    current_app.logger.info("User %s changed their avatar", identity.id)
    return get_user(identity)
