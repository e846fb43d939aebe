"""Outbound mail collaborator."""

from __future__ import annotations

import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from flask import Flask, current_app


@dataclass(frozen=True)
class MailMessage:
    to: str
    subject: str
    html: str
    text: str
    sender: str | None = None


class Mailer:
    """Send transactional mail over SMTP.

    When ``MAIL_SERVER`` is not configured the message is logged instead of
    sent, which keeps local development working without a mail sandbox.
    """

    def __init__(self, app: Flask | None = None) -> None:
        self.server: str | None = None
        self.port = 2525
        self.username: str | None = None
        self.password: str | None = None
        self.use_tls = True
        self.default_sender: str | None = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        self.server = app.config.get("MAIL_SERVER")
        self.port = int(app.config.get("MAIL_PORT", 2525))
        self.username = app.config.get("MAIL_USERNAME")
        self.password = app.config.get("MAIL_PASSWORD")
        self.use_tls = bool(app.config.get("MAIL_USE_TLS", True))
        self.default_sender = app.config.get("MAIL_DEFAULT_SENDER") or self.username
        app.extensions["mailer"] = self

    @property
    def is_configured(self) -> bool:
        return bool(self.server and self.default_sender)

    @staticmethod
    def _redact(address: str) -> str:
        if "@" not in address:
            return "redacted"
        local, domain = address.split("@", 1)
        return f"{local[:2]}***@{domain}"

    def send_mail(self, message: MailMessage) -> bool:
        """Deliver ``message``; returns False when the transport fails."""

        sender = message.sender or self.default_sender
        if not self.is_configured:
            current_app.logger.info(
                "Mail transport not configured; would send %r to %s",
                message.subject,
                self._redact(message.to),
            )
            return True

        envelope = MIMEMultipart("alternative")
        envelope["Subject"] = message.subject
        envelope["From"] = sender
        envelope["To"] = message.to
        envelope.attach(MIMEText(message.text, "plain"))
        envelope.attach(MIMEText(message.html, "html"))

        try:
            with smtplib.SMTP(self.server, self.port, timeout=10) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.sendmail(sender, [message.to], envelope.as_string())
        # UnicodeError: smtplib encodes envelope addresses as ASCII.
        except (smtplib.SMTPException, OSError, UnicodeError):
            current_app.logger.exception(
                "Failed to send mail to %s", self._redact(message.to)
            )
            return False

        current_app.logger.info("Mail sent to %s", self._redact(message.to))
        return True


def get_mailer() -> Mailer:
    return current_app.extensions["mailer"]
