"""
CareConnect — UI-Agnostic Care Service.

Service layer that performs every mutation and access check:
validate -> authorize -> persist -> rebuild reminders -> notify.

The HTTP API (or any other front end) calls this service and maps its
exceptions onto its own error responses.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from careconnect.core.matching import (
    MatchPreferences,
    RankedCaretaker,
    filter_caretakers,
    get_top_recommendations,
    sort_caretakers,
)
from careconnect.core.reminder_calculator import serialize_schedule
from careconnect.data.models import CARETAKER, PATIENT, ROLES, CaretakerProfile

if TYPE_CHECKING:
    from careconnect.core.notifier import CareNotifier
    from careconnect.core.scheduler import ReminderScheduler
    from careconnect.data.db import CareStores
    from careconnect.data.models import (
        Assignment,
        Medication,
        MedicationLog,
        Notification,
        Task,
        User,
    )

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class CareServiceError(Exception):
    """Base class for errors surfaced to callers of CareService."""


class NotFoundError(CareServiceError):
    pass


class AccessDeniedError(CareServiceError):
    pass


class ConflictError(CareServiceError):
    pass


class InvalidInputError(CareServiceError):
    pass


# ---------------------------------------------------------------------------
# CareService
# ---------------------------------------------------------------------------


class CareService:
    """Orchestrates patients, caretakers, medications, tasks and notifications."""

    def __init__(
        self,
        stores: CareStores,
        scheduler: ReminderScheduler,
        notifier: CareNotifier,
        top_recommendations: int = 3,
    ) -> None:
        self._stores = stores
        self._scheduler = scheduler
        self._notifier = notifier
        self._top_recommendations = top_recommendations

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def _ensure_can_manage(self, actor: User, owner_id: int) -> None:
        """Owners manage their own records; caretakers need an active assignment."""
        if actor.id == owner_id:
            return
        if actor.role == CARETAKER and self._stores.assignments.is_assigned(actor.id, owner_id):
            return
        raise AccessDeniedError("You are not assigned to this patient")

    def _resolve_owner(self, actor: User, patient_id: int | None) -> int:
        """Whose records an actor is reading or creating."""
        if patient_id is None or patient_id == actor.id:
            return actor.id
        self._ensure_can_manage(actor, patient_id)
        return patient_id

    def _get_user(self, user_id: int) -> User:
        user = self._stores.users.get_user(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    async def _notify_caretakers(
        self,
        patient_id: int,
        update_type: str,
        details: str,
        notification_type: str,
        reference_id: int,
    ) -> None:
        patient = self._stores.users.get_user(patient_id)
        if patient is None:
            return
        for assignment in self._stores.assignments.list_by_patient(patient_id, active_only=True):
            caretaker = self._stores.users.get_user(assignment.caretaker_id)
            if caretaker is None:
                continue
            await self._notifier.patient_update(
                caretaker, patient, update_type, details, notification_type, reference_id,
            )

    # ------------------------------------------------------------------
    # Users & caretaker profiles
    # ------------------------------------------------------------------

    def register_user(
        self,
        username: str,
        email: str,
        full_name: str,
        role: str,
        phone: str | None = None,
        profile: dict | None = None,
    ) -> User:
        """Create a user; caretakers may pass their profile fields at the same time."""
        if role not in ROLES:
            raise InvalidInputError(f"Unknown role: {role!r}")
        if self._stores.users.get_by_username(username) is not None:
            raise ConflictError("Username already exists")
        if self._stores.users.get_by_email(email) is not None:
            raise ConflictError("Email already exists")

        user = self._stores.users.add_user(username, email, full_name, role, phone)
        if role == CARETAKER and profile:
            self._stores.profiles.add_profile(CaretakerProfile(user_id=user.id, **profile))
        return user

    def get_user(self, user_id: int) -> User | None:
        return self._stores.users.get_user(user_id)

    def create_profile(self, actor: User, fields: dict) -> CaretakerProfile:
        if actor.role != CARETAKER:
            raise AccessDeniedError("Caretaker role required")
        if self._stores.profiles.get_profile(actor.id) is not None:
            raise ConflictError("Profile already exists")
        return self._stores.profiles.add_profile(CaretakerProfile(user_id=actor.id, **fields))

    def update_profile(self, actor: User, changes: dict) -> CaretakerProfile:
        if actor.role != CARETAKER:
            raise AccessDeniedError("Caretaker role required")
        if self._stores.profiles.get_profile(actor.id) is None:
            raise NotFoundError("Profile not found")
        return self._stores.profiles.update_profile(actor.id, changes)

    def get_caretaker(self, user_id: int) -> tuple[User, CaretakerProfile]:
        user = self._stores.users.get_user(user_id)
        profile = self._stores.profiles.get_profile(user_id)
        if user is None or profile is None or user.role != CARETAKER:
            raise NotFoundError(f"Caretaker {user_id} not found")
        return user, profile

    def search_caretakers(
        self,
        criteria: MatchPreferences,
        sort_by: str | None = "relevance",
    ) -> list[CaretakerProfile]:
        """Filtered full result list, sorted by a field-level key."""
        matched = filter_caretakers(self._stores.profiles.list_profiles(), criteria)
        return sort_caretakers(matched, sort_by)

    def recommend_caretakers(
        self,
        preferences: MatchPreferences,
        count: int | None = None,
    ) -> list[RankedCaretaker]:
        """Highlighted best matches, shown next to the full result list."""
        if count is None:
            count = self._top_recommendations
        return get_top_recommendations(
            self._stores.profiles.list_profiles(), preferences, count,
        )

    # ------------------------------------------------------------------
    # Assignments
    # ------------------------------------------------------------------

    async def create_assignment(
        self, actor: User, patient_id: int, caretaker_id: int,
    ) -> Assignment:
        if actor.role == PATIENT and patient_id != actor.id:
            raise AccessDeniedError("Patients can only create assignments for themselves")
        if actor.role == CARETAKER and caretaker_id != actor.id:
            raise AccessDeniedError("Caretakers can only assign themselves")

        caretaker = self._stores.users.get_user(caretaker_id)
        if caretaker is None or caretaker.role != CARETAKER:
            raise NotFoundError("Caretaker not found")
        patient = self._stores.users.get_user(patient_id)
        if patient is None or patient.role != PATIENT:
            raise NotFoundError("Patient not found")
        if self._stores.assignments.is_assigned(caretaker_id, patient_id):
            raise ConflictError("Caretaker is already assigned to this patient")

        assignment = self._stores.assignments.add_assignment(patient_id, caretaker_id)
        await self._notifier.assignment_created(patient, caretaker, assignment)
        return assignment

    def list_patient_assignments(self, actor: User) -> list[tuple[Assignment, User]]:
        """The patient's assignments, each paired with its caretaker."""
        if actor.role != PATIENT:
            raise AccessDeniedError("Patient role required")
        return [
            (a, self._get_user(a.caretaker_id))
            for a in self._stores.assignments.list_by_patient(actor.id)
        ]

    def list_caretaker_assignments(self, actor: User) -> list[tuple[Assignment, User]]:
        """The caretaker's assignments, each paired with its patient."""
        if actor.role != CARETAKER:
            raise AccessDeniedError("Caretaker role required")
        return [
            (a, self._get_user(a.patient_id))
            for a in self._stores.assignments.list_by_caretaker(actor.id)
        ]

    def end_assignment(self, actor: User, assignment_id: int) -> Assignment:
        assignment = self._stores.assignments.get_assignment(assignment_id)
        if assignment is None:
            raise NotFoundError("Assignment not found")
        if actor.id not in (assignment.patient_id, assignment.caretaker_id):
            raise AccessDeniedError("Access denied")
        return self._stores.assignments.end_assignment(assignment_id)

    # ------------------------------------------------------------------
    # Medications
    # ------------------------------------------------------------------

    def _get_medication_for(self, actor: User, medication_id: int) -> Medication:
        medication = self._stores.medications.get_medication(medication_id)
        if medication is None:
            raise NotFoundError("Medication not found")
        self._ensure_can_manage(actor, medication.user_id)
        return medication

    @staticmethod
    def _schedule_text(schedule: list[str]) -> str:
        try:
            return serialize_schedule(schedule)
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

    def list_medications(self, actor: User, patient_id: int | None = None) -> list[Medication]:
        owner_id = self._resolve_owner(actor, patient_id)
        return self._stores.medications.list_by_user(owner_id)

    def create_medication(
        self,
        actor: User,
        name: str,
        dosage: str,
        schedule: list[str],
        instructions: str | None = None,
        patient_id: int | None = None,
    ) -> Medication:
        owner_id = self._resolve_owner(actor, patient_id)
        medication = self._stores.medications.add_medication(
            owner_id, name, dosage, self._schedule_text(schedule), instructions,
        )
        self._scheduler.schedule_medication_reminders(owner_id)
        return medication

    def update_medication(self, actor: User, medication_id: int, changes: dict) -> Medication:
        medication = self._get_medication_for(actor, medication_id)
        changes = dict(changes)
        if changes.get("schedule") is not None:
            changes["schedule"] = self._schedule_text(changes["schedule"])
        updated = self._stores.medications.update_medication(medication_id, changes)
        self._scheduler.schedule_medication_reminders(medication.user_id)
        return updated

    def delete_medication(self, actor: User, medication_id: int) -> None:
        medication = self._get_medication_for(actor, medication_id)
        self._stores.medications.delete_medication(medication_id)
        self._scheduler.schedule_medication_reminders(medication.user_id)

    async def log_medication(
        self, actor: User, medication_id: int, notes: str = "",
    ) -> MedicationLog:
        """Record a dose. A caretaker logging it is stored as ``taken_by``."""
        medication = self._get_medication_for(actor, medication_id)
        self_administered = medication.user_id == actor.id
        log = self._stores.medications.add_log(
            medication_id,
            taken_by=None if self_administered else actor.id,
            notes=notes or "",
        )

        if self_administered:
            patient = self._get_user(actor.id)
            await self._notify_caretakers(
                patient.id,
                "Medication Taken",
                f"{patient.full_name} has taken {medication.name} ({medication.dosage})",
                "medication",
                medication.id,
            )
        return log

    def list_medication_logs(self, actor: User, medication_id: int) -> list[MedicationLog]:
        self._get_medication_for(actor, medication_id)
        return self._stores.medications.list_logs(medication_id)

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def _get_task_for(self, actor: User, task_id: int) -> Task:
        task = self._stores.tasks.get_task(task_id)
        if task is None:
            raise NotFoundError("Task not found")
        self._ensure_can_manage(actor, task.user_id)
        return task

    def _localize(self, due_date: datetime) -> datetime:
        """Naive due dates are read in the scheduler's timezone."""
        if due_date.tzinfo is None:
            return due_date.replace(tzinfo=self._scheduler.now().tzinfo)
        return due_date

    def list_tasks(self, actor: User, patient_id: int | None = None) -> list[Task]:
        owner_id = self._resolve_owner(actor, patient_id)
        return self._stores.tasks.list_by_user(owner_id)

    def create_task(
        self,
        actor: User,
        title: str,
        due_date: datetime,
        description: str | None = None,
        recurrence: str | None = None,
        patient_id: int | None = None,
    ) -> Task:
        owner_id = self._resolve_owner(actor, patient_id)
        task = self._stores.tasks.add_task(
            owner_id, title, self._localize(due_date), description, recurrence,
        )
        self._scheduler.schedule_task_reminders(owner_id)
        return task

    def update_task(self, actor: User, task_id: int, changes: dict) -> Task:
        task = self._get_task_for(actor, task_id)
        changes = dict(changes)
        if isinstance(changes.get("due_date"), datetime):
            changes["due_date"] = self._localize(changes["due_date"])
        updated = self._stores.tasks.update_task(task_id, changes)
        self._scheduler.schedule_task_reminders(task.user_id)
        return updated

    async def complete_task(self, actor: User, task_id: int) -> Task:
        """Complete a task once. Completing it again returns it unchanged."""
        task = self._get_task_for(actor, task_id)
        if task.is_completed:
            return task

        completed = self._stores.tasks.complete_task(task_id, actor.id)
        self._scheduler.schedule_task_reminders(task.user_id)

        if task.user_id == actor.id:
            patient = self._get_user(actor.id)
            await self._notify_caretakers(
                patient.id,
                "Task Completed",
                f"{patient.full_name} has completed the task: {task.title}",
                "task",
                task.id,
            )
        return completed

    def delete_task(self, actor: User, task_id: int) -> None:
        task = self._get_task_for(actor, task_id)
        self._stores.tasks.delete_task(task_id)
        self._scheduler.schedule_task_reminders(task.user_id)

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def list_notifications(self, actor: User) -> list[Notification]:
        return self._stores.notifications.list_by_user(actor.id)

    def mark_notification_read(self, actor: User, notification_id: int) -> Notification:
        notification = self._stores.notifications.get_notification(notification_id)
        if notification is None or notification.user_id != actor.id:
            raise NotFoundError("Notification not found")
        return self._stores.notifications.mark_read(notification_id)
