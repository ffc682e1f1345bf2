"""Shared test fixtures and configuration.

Sets environment variables before any careconnect import so
careconnect.config loads predictable settings, and provides temp-file
stores plus a manually advanced clock for the reminder scheduler.
"""

import os
import tempfile

# Patch env vars BEFORE any careconnect imports
os.environ.setdefault("DATABASE_PATH", os.path.join(tempfile.gettempdir(), "careconnect-tests.db"))
os.environ.setdefault("MAIL_PROVIDER", "log")
os.environ.setdefault("TIMEZONE", "UTC")
os.environ.setdefault("SEED_CARETAKERS", "false")

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio


START = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


class ManualClock:
    """Fake now/sleep pair. Sleepers only wake when the test advances time."""

    def __init__(self, start: datetime = START):
        self.current = start
        self._event: asyncio.Event | None = None

    def __call__(self) -> datetime:
        return self.current

    def _wakeup(self) -> asyncio.Event:
        if self._event is None:
            self._event = asyncio.Event()
        return self._event

    async def sleep(self, seconds: float) -> None:
        deadline = self.current + timedelta(seconds=seconds)
        while self.current < deadline:
            await self._wakeup().wait()

    async def advance(self, delta: timedelta) -> None:
        """Move time forward and let every woken timer run to completion.

        Timers armed since the last advance first get to start sleeping, so
        their deadlines are measured from the time they were armed.
        """
        await self._settle()
        self.current += delta
        event = self._wakeup()
        event.set()
        event.clear()
        await self._settle()

    @staticmethod
    async def _settle() -> None:
        for _ in range(20):
            await asyncio.sleep(0)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def tmp_db_path(tmp_path):
    """Return a temporary SQLite DB path."""
    return str(tmp_path / "test_careconnect.db")


@pytest.fixture
def stores(tmp_db_path):
    """Every store, backed by one temp file."""
    from careconnect.data.db import CareStores
    return CareStores.open(tmp_db_path)


@dataclass
class SentMail:
    recipient: str
    subject: str
    body: str


class RecordingMailer:
    """MailerPort fake that keeps every message for assertions."""

    def __init__(self) -> None:
        self.sent: list[SentMail] = []

    async def send(self, recipient: str, subject: str, body: str) -> bool:
        self.sent.append(SentMail(recipient=recipient, subject=subject, body=body))
        return True


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def notifier(mailer, stores):
    from careconnect.core.notifier import CareNotifier
    return CareNotifier(mailer, stores.notifications)


@pytest_asyncio.fixture
async def scheduler(stores, notifier, clock):
    """A ReminderScheduler on the manual clock, stopped after the test."""
    from careconnect.core.scheduler import ReminderScheduler
    sched = ReminderScheduler(stores, notifier, now_fn=clock, sleep_fn=clock.sleep)
    yield sched
    await sched.stop()


@pytest_asyncio.fixture
async def service(stores, scheduler, notifier):
    from careconnect.core.care_service import CareService
    return CareService(stores, scheduler, notifier)


@pytest.fixture
def patient(stores):
    return stores.users.add_user("pat", "pat@example.com", "Pat Patient", "patient")


@pytest.fixture
def caretaker(stores):
    return stores.users.add_user("carl", "carl@example.com", "Carl Carer", "caretaker")
