"""Mail port — abstract interface for sending email to users.

Core modules depend on this protocol, never on a specific mail transport.
"""

from __future__ import annotations

from typing import Protocol


class MailerPort(Protocol):
    """Abstract mail interface used by core modules.

    Fire-and-forget: implementations log failures and return False instead
    of raising.
    """

    async def send(self, recipient: str, subject: str, body: str) -> bool: ...
