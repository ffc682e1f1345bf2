"""Logging mail adapter — implements MailerPort without a mail server.

Used in development and whenever MAIL_PROVIDER=log. Messages are only
logged; nothing is kept in memory.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class LogMailer:
    """MailerPort implementation that only logs."""

    async def send(self, recipient: str, subject: str, body: str) -> bool:
        logger.info("Mail to %s: %s", recipient, subject)
        logger.debug("Mail body for %s:\n%s", recipient, body)
        return True
