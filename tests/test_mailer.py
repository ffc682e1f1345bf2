"""Tests for the mail adapters and their factory."""

import logging
import smtplib
from unittest.mock import MagicMock, patch

import pytest

from careconnect.adapters.log_mailer import LogMailer
from careconnect.adapters.mailer_factory import create_mailer
from careconnect.adapters.smtp_mailer import SmtpMailer


class TestCreateMailer:
    @patch("careconnect.adapters.mailer_factory.settings")
    def test_returns_log_mailer(self, mock_settings):
        mock_settings.MAIL_PROVIDER = "log"
        assert isinstance(create_mailer(), LogMailer)

    @patch("careconnect.adapters.mailer_factory.settings")
    def test_returns_smtp_mailer(self, mock_settings):
        mock_settings.MAIL_PROVIDER = "SMTP"
        mock_settings.SMTP_HOST = "smtp.example.com"
        mock_settings.SMTP_PORT = 587
        mock_settings.SENDER_EMAIL = "care@example.com"
        mailer = create_mailer()
        assert isinstance(mailer, SmtpMailer)
        assert mailer._host == "smtp.example.com"

    @patch("careconnect.adapters.mailer_factory.settings")
    def test_unknown_provider_raises(self, mock_settings):
        mock_settings.MAIL_PROVIDER = "pigeon"
        with pytest.raises(ValueError, match="Unknown MAIL_PROVIDER"):
            create_mailer()


class TestLogMailer:
    @pytest.mark.asyncio
    async def test_logs_sent_mail(self, caplog):
        mailer = LogMailer()
        with caplog.at_level(logging.INFO, logger="careconnect.adapters.log_mailer"):
            assert await mailer.send("pat@example.com", "Hello", "Body") is True
        assert "Mail to pat@example.com: Hello" in caplog.text

    @pytest.mark.asyncio
    async def test_keeps_nothing_in_memory(self):
        mailer = LogMailer()
        for _ in range(3):
            await mailer.send("pat@example.com", "Reminder", "Body")
        assert vars(mailer) == {}


class TestSmtpMailer:
    def _mailer(self, **kwargs):
        return SmtpMailer("smtp.example.com", 587, "care@example.com", **kwargs)

    @pytest.mark.asyncio
    async def test_sends_with_tls_and_login(self):
        smtp = MagicMock()
        with patch("careconnect.adapters.smtp_mailer.smtplib.SMTP") as smtp_cls:
            smtp_cls.return_value.__enter__.return_value = smtp
            ok = await self._mailer(username="u", password="p").send(
                "pat@example.com", "Reminder", "Take your pills",
            )

        assert ok is True
        smtp.starttls.assert_called_once()
        smtp.login.assert_called_once_with("u", "p")
        msg = smtp.send_message.call_args.args[0]
        assert msg["To"] == "pat@example.com"
        assert msg["From"] == "care@example.com"
        assert msg["Subject"] == "Reminder"

    @pytest.mark.asyncio
    async def test_skips_tls_and_login_when_not_configured(self):
        smtp = MagicMock()
        with patch("careconnect.adapters.smtp_mailer.smtplib.SMTP") as smtp_cls:
            smtp_cls.return_value.__enter__.return_value = smtp
            await self._mailer(use_tls=False).send("pat@example.com", "S", "B")

        smtp.starttls.assert_not_called()
        smtp.login.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_returns_false(self):
        with patch(
            "careconnect.adapters.smtp_mailer.smtplib.SMTP",
            side_effect=smtplib.SMTPConnectError(421, "busy"),
        ):
            ok = await self._mailer().send("pat@example.com", "S", "B")
        assert ok is False

    @pytest.mark.asyncio
    async def test_connection_refused_returns_false(self):
        with patch(
            "careconnect.adapters.smtp_mailer.smtplib.SMTP",
            side_effect=ConnectionRefusedError(),
        ):
            assert await self._mailer().send("pat@example.com", "S", "B") is False
