"""Email verification workflow.

A user moves from unverified (no token) to unverified with a pending token to
verified. Verified is terminal. Tokens are single-use: confirming clears the
token in the same UPDATE that flips ``verify``.
"""

from __future__ import annotations

import secrets

from flask import current_app

from errors import AlreadyVerified, ResourceNotFound
from models import db
from models.user import User
from services.mail import MailMessage, get_mailer


def generate_verification_token() -> str:
    """Return a random 128-bit token as hex."""

    return secrets.token_hex(16)


def build_verification_link(token: str) -> str:
    base_url = current_app.config.get("BASE_URL", "").rstrip("/")
    return f"{base_url}/users/verify/{token}"


def send_verification_email(email: str, token: str) -> bool:
    link = build_verification_link(token)
    message = MailMessage(
        to=email,
        subject="Verify your email",
        html=f'<p>Confirm your email by following <a href="{link}">this link</a>.</p>',
        text=f"Confirm your email by opening {link}",
    )
    return get_mailer().send_mail(message)


def issue_verification(user: User) -> str:
    """Store a fresh token on an unverified user and mail the link.

    The UPDATE is conditional on ``verify`` still being false so a concurrent
    confirmation cannot be undone by a late resend.
    """

    token = generate_verification_token()
    updated = User.query.filter_by(id=user.id, verify=False).update(
        {User.verification_token: token}, synchronize_session=False
    )
    db.session.commit()
    if not updated:
        raise AlreadyVerified()

    send_verification_email(user.email, token)
    return token


def confirm(token: str) -> User:
    """Redeem ``token`` and mark its owner verified."""

    user = User.query.filter_by(verification_token=token).first()
    if user is None:
        raise ResourceNotFound("User not found")

    updated = User.query.filter_by(id=user.id, verification_token=token).update(
        {User.verify: True, User.verification_token: None},
        synchronize_session=False,
    )
    db.session.commit()
    if not updated:
        raise ResourceNotFound("User not found")

    db.session.refresh(user)
    current_app.logger.info("User %s verified their email", user.id)
    return user


def resend(email: str) -> None:
    """Re-issue the verification link for an unverified account."""

    user = User.query.filter_by(email=email.strip().lower()).first()
    if user is None:
        raise ResourceNotFound("User not found")
    if user.verify:
        raise AlreadyVerified()
    issue_verification(user)
