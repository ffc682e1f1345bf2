"""
CareConnect — Reminder Scheduler.

Keeps an in-memory registry of pending reminder timers per user:
one timer per (medication, "HH:MM" slot) and one per incomplete task.
Timers are asyncio tasks that sleep until their fire instant, then email
the user and record an in-app notification.

Every mutation of a user's medications or tasks triggers a full rebuild of
that user's timers; there is no incremental diffing. A rebuild loads its
data first, then cancels and rearms without yielding to the event loop, so
two rebuilds for the same user can never interleave.

Medication slots recur daily: a fired slot rearms itself for the next day.
On top of that a daily sweep rebuilds every user, and start() runs one
rebuild immediately, so reminders are restored after a process restart.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime, time
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

from careconnect.core.reminder_calculator import (
    next_occurrence,
    parse_schedule,
    parse_slot,
    seconds_until,
    task_reminder_time,
)

if TYPE_CHECKING:
    from careconnect.core.notifier import CareNotifier
    from careconnect.data.db import CareStores

logger = logging.getLogger(__name__)

NowFn = Callable[[], datetime]
SleepFn = Callable[[float], Awaitable[None]]

MedicationKey = tuple[int, str]   # (medication id, "HH:MM")


@dataclass
class PendingReminder:
    """One armed timer."""

    kind: str              # "medication" | "task"
    entity_id: int
    fire_at: datetime
    timer: asyncio.Task
    slot: str | None = None


class ReminderScheduler:
    """Owns every reminder timer of the process.

    Methods that arm timers must be called from inside a running event loop.
    """

    def __init__(
        self,
        stores: CareStores,
        notifier: CareNotifier,
        *,
        now_fn: NowFn | None = None,
        sleep_fn: SleepFn | None = None,
        timezone: str = "UTC",
        task_lead_minutes: int = 30,
        sweep_time: str = "00:00:30",
    ) -> None:
        self._users = stores.users
        self._medications = stores.medications
        self._tasks = stores.tasks
        self._notifier = notifier

        tz = ZoneInfo(timezone)
        self._now: NowFn = now_fn or (lambda: datetime.now(tz))
        self._sleep: SleepFn = sleep_fn or asyncio.sleep
        self._task_lead_minutes = task_lead_minutes
        self._sweep_time: time = time.fromisoformat(sweep_time)

        self._medication_timers: dict[int, dict[MedicationKey, PendingReminder]] = {}
        self._task_timers: dict[int, dict[int, PendingReminder]] = {}
        self._sweep_task: asyncio.Task | None = None

    def now(self) -> datetime:
        return self._now()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Arm every user's reminders and start the daily sweep."""
        if self._sweep_task is not None:
            return
        self.rebuild_all()
        self._sweep_task = asyncio.create_task(self._sweep_loop(), name="reminder-sweep")
        logger.info("Reminder sweep scheduled daily at %s", self._sweep_time.isoformat())

    async def stop(self) -> None:
        """Stop the sweep and cancel every pending timer."""
        tasks = [r.timer for r in self._all_pending()]
        if self._sweep_task is not None:
            tasks.append(self._sweep_task)
            self._sweep_task.cancel()
            self._sweep_task = None
        self.clear_all_reminders()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def clear_all_reminders(self) -> None:
        for pending in self._all_pending():
            pending.timer.cancel()
        self._medication_timers.clear()
        self._task_timers.clear()

    async def _sweep_loop(self) -> None:
        while True:
            now = self._now()
            next_sweep = next_occurrence(self._sweep_time, now)
            await self._sleep(seconds_until(next_sweep, now))
            self.rebuild_all()

    def rebuild_all(self) -> None:
        """Rebuild reminders for every user with medications, tasks or live timers."""
        user_ids = (
            set(self._medications.list_user_ids())
            | set(self._tasks.list_user_ids())
            | set(self._medication_timers)
            | set(self._task_timers)
        )
        for user_id in sorted(user_ids):
            try:
                self.initialize_user_reminders(user_id)
            except Exception as exc:
                logger.error("Failed to rebuild reminders for user %d: %s", user_id, exc)
        logger.info("Reminder sweep rebuilt %d users", len(user_ids))

    # ------------------------------------------------------------------
    # Rebuilds
    # ------------------------------------------------------------------

    def initialize_user_reminders(self, user_id: int) -> None:
        self.schedule_medication_reminders(user_id)
        self.schedule_task_reminders(user_id)

    def schedule_medication_reminders(self, user_id: int) -> int:
        """Cancel and rearm every medication timer of one user.

        A malformed schedule only skips that medication (or that slot).
        Returns the number of armed timers.
        """
        user = self._users.get_user(user_id)
        medications = self._medications.list_by_user(user_id) if user else []

        self._cancel(self._medication_timers.pop(user_id, {}))
        if user is None:
            return 0

        now = self._now()
        armed: dict[MedicationKey, PendingReminder] = {}
        for medication in medications:
            try:
                slots = parse_schedule(medication.schedule)
            except ValueError as exc:
                logger.error("Error parsing schedule for medication #%d: %s", medication.id, exc)
                continue

            for raw in slots:
                try:
                    slot = parse_slot(raw).strftime("%H:%M")
                except ValueError as exc:
                    logger.error("Skipping slot of medication #%d: %s", medication.id, exc)
                    continue
                key = (medication.id, slot)
                if key in armed:
                    continue
                fire_at = next_occurrence(slot, now)
                armed[key] = self._arm_medication(user_id, medication.id, slot, fire_at, now)

        if armed:
            self._medication_timers[user_id] = armed
        logger.info("Armed %d medication reminders for user %d", len(armed), user_id)
        return len(armed)

    def schedule_task_reminders(self, user_id: int) -> int:
        """Cancel and rearm every task timer of one user.

        Only incomplete tasks whose reminder instant (lead time before due)
        is still ahead get a timer. Returns the number of armed timers.
        """
        user = self._users.get_user(user_id)
        tasks = self._tasks.list_by_user(user_id) if user else []

        self._cancel(self._task_timers.pop(user_id, {}))
        if user is None:
            return 0

        now = self._now()
        armed: dict[int, PendingReminder] = {}
        for task in tasks:
            if task.is_completed:
                continue
            try:
                fire_at = task_reminder_time(task.due_date, now, self._task_lead_minutes)
            except (TypeError, ValueError) as exc:
                logger.error("Error computing reminder for task #%d: %s", task.id, exc)
                continue
            if fire_at is None:
                logger.debug("Task #%d is due too soon for a reminder; skipped", task.id)
                continue
            timer = asyncio.create_task(
                self._fire_task(user_id, task.id, seconds_until(fire_at, now)),
                name=f"task-reminder-{task.id}",
            )
            armed[task.id] = PendingReminder(
                kind="task", entity_id=task.id, fire_at=fire_at, timer=timer,
            )

        if armed:
            self._task_timers[user_id] = armed
        logger.info("Armed %d task reminders for user %d", len(armed), user_id)
        return len(armed)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def pending_timers(self, user_id: int) -> list[PendingReminder]:
        """Pending timers of one user, soonest first."""
        pending = [
            *self._medication_timers.get(user_id, {}).values(),
            *self._task_timers.get(user_id, {}).values(),
        ]
        return sorted(pending, key=lambda r: r.fire_at)

    def _all_pending(self) -> list[PendingReminder]:
        return [
            r
            for registry in (self._medication_timers, self._task_timers)
            for timers in registry.values()
            for r in timers.values()
        ]

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    @staticmethod
    def _cancel(timers: dict) -> None:
        for pending in timers.values():
            pending.timer.cancel()

    def _arm_medication(
        self,
        user_id: int,
        medication_id: int,
        slot: str,
        fire_at: datetime,
        now: datetime,
    ) -> PendingReminder:
        timer = asyncio.create_task(
            self._fire_medication(user_id, medication_id, slot, fire_at, seconds_until(fire_at, now)),
            name=f"medication-reminder-{medication_id}-{slot}",
        )
        return PendingReminder(
            kind="medication", entity_id=medication_id, fire_at=fire_at, timer=timer, slot=slot,
        )

    async def _fire_medication(
        self,
        user_id: int,
        medication_id: int,
        slot: str,
        fire_at: datetime,
        delay: float,
    ) -> None:
        await self._sleep(delay)

        # Leave the registry before any await: a rebuild from here on must
        # not cancel a reminder that is already being delivered.
        key = (medication_id, slot)
        self._medication_timers.get(user_id, {}).pop(key, None)

        medication = self._medications.get_medication(medication_id)
        user = self._users.get_user(user_id)
        if medication is None or user is None or medication.user_id != user_id:
            return

        now = self._now()
        next_fire = next_occurrence(slot, max(now, fire_at))
        self._medication_timers.setdefault(user_id, {})[key] = self._arm_medication(
            user_id, medication_id, slot, next_fire, now,
        )

        try:
            await self._notifier.medication_reminder(user, medication, slot)
        except Exception as exc:
            logger.error(
                "Failed to deliver reminder for medication #%d at %s: %s",
                medication_id, slot, exc,
            )

    async def _fire_task(self, user_id: int, task_id: int, delay: float) -> None:
        await self._sleep(delay)
        self._task_timers.get(user_id, {}).pop(task_id, None)

        task = self._tasks.get_task(task_id)
        user = self._users.get_user(user_id)
        if task is None or user is None or task.is_completed:
            return

        try:
            await self._notifier.task_reminder(user, task)
        except Exception as exc:
            logger.error("Failed to deliver reminder for task #%d: %s", task_id, exc)
