"""Mailer adapter factory — creates the right adapter based on config."""

from __future__ import annotations

from careconnect.config import settings
from careconnect.ports.mail_port import MailerPort


def create_mailer() -> MailerPort:
    """Return the mail adapter matching the MAIL_PROVIDER setting."""
    provider = settings.MAIL_PROVIDER.lower()

    if provider == "log":
        from careconnect.adapters.log_mailer import LogMailer

        return LogMailer()

    if provider == "smtp":
        from careconnect.adapters.smtp_mailer import SmtpMailer

        return SmtpMailer(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            sender=settings.SENDER_EMAIL,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
            use_tls=settings.SMTP_USE_TLS,
        )

    raise ValueError(f"Unknown MAIL_PROVIDER: {provider!r}")
