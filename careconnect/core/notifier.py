"""
CareConnect — Care notifications.

Every user-facing event produces two side effects: an email through the
MailerPort and an in-app notification row. Email is best-effort; a failed
send is logged and the notification is still recorded.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from careconnect.data.db import NotificationDB
    from careconnect.data.models import Assignment, Medication, Task, User
    from careconnect.ports.mail_port import MailerPort

logger = logging.getLogger(__name__)


class CareNotifier:
    """Composes reminder/update messages and delivers them on both channels."""

    def __init__(self, mailer: MailerPort, notifications: NotificationDB) -> None:
        self._mailer = mailer
        self._notifications = notifications

    async def _email(self, recipient: User, subject: str, body: str) -> bool:
        sent = await self._mailer.send(recipient.email, subject, body)
        if not sent:
            logger.warning("Email '%s' to user %d was not delivered", subject, recipient.id)
        return sent

    async def medication_reminder(self, user: User, medication: Medication, slot: str) -> None:
        await self._email(
            user,
            f"Medication Reminder: {medication.name}",
            f"Hello {user.full_name}, this is a reminder to take "
            f"{medication.name} ({medication.dosage}) at {slot}.",
        )
        self._notifications.add_notification(
            user_id=user.id,
            type="medication",
            title="Medication Reminder",
            message=f"Time to take {medication.name} ({medication.dosage})",
            reference_id=medication.id,
        )

    async def task_reminder(self, user: User, task: Task) -> None:
        due = task.due_date.strftime("%H:%M")
        await self._email(
            user,
            f"Task Reminder: {task.title}",
            f"Hello {user.full_name}, this is a reminder for your task: "
            f"{task.title} - {task.description or ''}. Due at {due}.",
        )
        self._notifications.add_notification(
            user_id=user.id,
            type="task",
            title="Task Reminder",
            message=f"Upcoming task: {task.title}",
            reference_id=task.id,
        )

    async def patient_update(
        self,
        caretaker: User,
        patient: User,
        update_type: str,
        details: str,
        notification_type: str,
        reference_id: int | None = None,
    ) -> None:
        """Tell a caretaker that their patient did something (took a dose, finished a task)."""
        await self._email(
            caretaker,
            f"Update for your patient {patient.full_name}",
            f"Hello {caretaker.full_name}, there's an update for "
            f"{patient.full_name}: {update_type} - {details}",
        )
        self._notifications.add_notification(
            user_id=caretaker.id,
            type=notification_type,
            title=update_type,
            message=details,
            reference_id=reference_id,
        )

    async def assignment_created(
        self, patient: User, caretaker: User, assignment: Assignment,
    ) -> None:
        await self._email(
            patient,
            "New Caretaker Assignment",
            f"Hello {patient.full_name}, {caretaker.full_name} has been assigned as your caretaker.",
        )
        await self._email(
            caretaker,
            "New Patient Assignment",
            f"Hello {caretaker.full_name}, you have been assigned to care for {patient.full_name}.",
        )
        self._notifications.add_notification(
            user_id=patient.id,
            type="assignment",
            title="New Caretaker Assigned",
            message=f"{caretaker.full_name} has been assigned as your caretaker.",
            reference_id=assignment.id,
        )
        self._notifications.add_notification(
            user_id=caretaker.id,
            type="assignment",
            title="New Patient Assigned",
            message=f"You have been assigned to care for {patient.full_name}.",
            reference_id=assignment.id,
        )
