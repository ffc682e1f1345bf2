"""
CareConnect — SQLite storage.

One store per record type, all sharing a single database file. Misses return
None, deletes return whether a row was removed. Everything above this module
works with the dataclasses in careconnect.data.models.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from careconnect.data.models import (
    Assignment,
    CaretakerProfile,
    Medication,
    MedicationLog,
    Notification,
    Task,
    User,
)

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now().isoformat()


class _SQLiteStore:
    """Connection handling shared by every store."""

    def __init__(self, db_path: str | None = None) -> None:
        if db_path is None:
            from careconnect.config import settings
            db_path = settings.DATABASE_PATH

        self._db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        raise NotImplementedError


class UserDB(_SQLiteStore):
    """Registered patients and caretakers."""

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id          INTEGER PRIMARY KEY AUTOINCREMENT,
                    username    TEXT NOT NULL UNIQUE,
                    email       TEXT NOT NULL,
                    full_name   TEXT NOT NULL,
                    phone       TEXT,
                    role        TEXT NOT NULL,
                    created_at  TEXT NOT NULL
                )
            """)
        logger.debug("Users table initialized at %s", self._db_path)

    @staticmethod
    def _row_to_user(row: sqlite3.Row) -> User:
        return User(
            id=row["id"],
            username=row["username"],
            email=row["email"],
            full_name=row["full_name"],
            phone=row["phone"],
            role=row["role"],
            created_at=row["created_at"],
        )

    def add_user(
        self,
        username: str,
        email: str,
        full_name: str,
        role: str,
        phone: str | None = None,
    ) -> User:
        """Register a new user. Raises sqlite3.IntegrityError on a taken username."""
        now = _now_iso()
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO users (username, email, full_name, phone, role, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (username, email, full_name, phone, role, now),
            )
            user_id = cursor.lastrowid

        logger.info("User registered: #%d '%s' (%s)", user_id, username, role)
        return User(
            id=user_id,
            username=username,
            email=email,
            full_name=full_name,
            phone=phone,
            role=role,
            created_at=now,
        )

    def get_user(self, user_id: int) -> User | None:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    def get_by_username(self, username: str) -> User | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM users WHERE username = ?", (username,)
            ).fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    def get_by_email(self, email: str) -> User | None:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
        if row is None:
            return None
        return self._row_to_user(row)

    def list_users(self, role: str | None = None) -> list[User]:
        query = "SELECT * FROM users"
        params: list = []
        if role is not None:
            query += " WHERE role = ?"
            params.append(role)
        query += " ORDER BY id"
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_user(r) for r in rows]


class CaretakerProfileDB(_SQLiteStore):
    """One bookable profile per caretaker, keyed by user id."""

    _UPDATABLE = {
        "bio", "price_per_day", "location", "service_areas", "specializations",
        "gender", "age", "years_experience", "is_certified",
        "is_background_checked", "is_available", "provides_live_location",
        "image_url",
    }
    _JSON_COLUMNS = {"service_areas", "specializations"}
    _BOOL_COLUMNS = {
        "is_certified", "is_background_checked", "is_available",
        "provides_live_location",
    }

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS caretaker_profiles (
                    id                     INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id                INTEGER NOT NULL UNIQUE,
                    bio                    TEXT    NOT NULL,
                    price_per_day          REAL    NOT NULL,
                    years_experience       INTEGER,
                    location               TEXT    NOT NULL,
                    service_areas          TEXT    NOT NULL DEFAULT '[]',
                    gender                 TEXT    NOT NULL DEFAULT 'not specified',
                    age                    INTEGER,
                    specializations        TEXT    NOT NULL DEFAULT '[]',
                    is_certified           INTEGER NOT NULL DEFAULT 0,
                    is_background_checked  INTEGER NOT NULL DEFAULT 0,
                    is_available           INTEGER NOT NULL DEFAULT 1,
                    provides_live_location INTEGER NOT NULL DEFAULT 0,
                    rating                 REAL,
                    review_count           INTEGER NOT NULL DEFAULT 0,
                    image_url              TEXT
                )
            """)
        logger.debug("Caretaker profiles table initialized at %s", self._db_path)

    @staticmethod
    def _row_to_profile(row: sqlite3.Row) -> CaretakerProfile:
        return CaretakerProfile(
            id=row["id"],
            user_id=row["user_id"],
            bio=row["bio"],
            price_per_day=row["price_per_day"],
            years_experience=row["years_experience"],
            location=row["location"],
            service_areas=json.loads(row["service_areas"]),
            gender=row["gender"],
            age=row["age"],
            specializations=json.loads(row["specializations"]),
            is_certified=bool(row["is_certified"]),
            is_background_checked=bool(row["is_background_checked"]),
            is_available=bool(row["is_available"]),
            provides_live_location=bool(row["provides_live_location"]),
            rating=row["rating"],
            review_count=row["review_count"],
            image_url=row["image_url"],
        )

    def _encode(self, column: str, value):
        if column in self._JSON_COLUMNS:
            return json.dumps(list(value or []))
        if column in self._BOOL_COLUMNS:
            return int(bool(value))
        return value

    def add_profile(self, profile: CaretakerProfile) -> CaretakerProfile:
        """Insert a caretaker profile. Rating and review count always start empty."""
        columns = sorted(self._UPDATABLE)
        values = [self._encode(c, getattr(profile, c)) for c in columns]
        placeholders = ", ".join("?" for _ in columns)
        with self._connect() as conn:
            cursor = conn.execute(
                f"INSERT INTO caretaker_profiles (user_id, {', '.join(columns)}) "
                f"VALUES (?, {placeholders})",
                [profile.user_id, *values],
            )
            profile_id = cursor.lastrowid

        logger.info("Caretaker profile #%d created for user %d", profile_id, profile.user_id)
        return self.get_profile(profile.user_id)

    def get_profile(self, user_id: int) -> CaretakerProfile | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM caretaker_profiles WHERE user_id = ?", (user_id,)
            ).fetchone()
        if row is None:
            return None
        return self._row_to_profile(row)

    def update_profile(self, user_id: int, changes: dict) -> CaretakerProfile | None:
        """Apply a partial update. Unknown keys are ignored."""
        fields = {k: v for k, v in changes.items() if k in self._UPDATABLE}
        if fields:
            assignments = ", ".join(f"{k} = ?" for k in fields)
            values = [self._encode(k, v) for k, v in fields.items()]
            with self._connect() as conn:
                conn.execute(
                    f"UPDATE caretaker_profiles SET {assignments} WHERE user_id = ?",
                    [*values, user_id],
                )
            logger.info("Caretaker profile for user %d updated: %s", user_id, sorted(fields))
        return self.get_profile(user_id)

    def set_rating(self, user_id: int, rating: float, review_count: int) -> None:
        with self._connect() as conn:
            conn.execute(
                "UPDATE caretaker_profiles SET rating = ?, review_count = ? WHERE user_id = ?",
                (rating, review_count, user_id),
            )

    def list_profiles(self) -> list[CaretakerProfile]:
        """All profiles in insertion order (the order matching treats as relevance)."""
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM caretaker_profiles ORDER BY id").fetchall()
        return [self._row_to_profile(r) for r in rows]


class AssignmentDB(_SQLiteStore):
    """Patient-caretaker pairings."""

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS assignments (
                    id            INTEGER PRIMARY KEY AUTOINCREMENT,
                    patient_id    INTEGER NOT NULL,
                    caretaker_id  INTEGER NOT NULL,
                    start_date    TEXT    NOT NULL,
                    end_date      TEXT,
                    is_active     INTEGER NOT NULL DEFAULT 1
                )
            """)
        logger.debug("Assignments table initialized at %s", self._db_path)

    @staticmethod
    def _row_to_assignment(row: sqlite3.Row) -> Assignment:
        return Assignment(
            id=row["id"],
            patient_id=row["patient_id"],
            caretaker_id=row["caretaker_id"],
            start_date=row["start_date"],
            end_date=row["end_date"],
            is_active=bool(row["is_active"]),
        )

    def add_assignment(self, patient_id: int, caretaker_id: int) -> Assignment:
        start = _now_iso()
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO assignments (patient_id, caretaker_id, start_date, is_active)
                VALUES (?, ?, ?, 1)
                """,
                (patient_id, caretaker_id, start),
            )
            assignment_id = cursor.lastrowid

        logger.info(
            "Assignment #%d: caretaker %d -> patient %d",
            assignment_id, caretaker_id, patient_id,
        )
        return Assignment(
            id=assignment_id,
            patient_id=patient_id,
            caretaker_id=caretaker_id,
            start_date=start,
        )

    def get_assignment(self, assignment_id: int) -> Assignment | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM assignments WHERE id = ?", (assignment_id,)
            ).fetchone()
        if row is None:
            return None
        return self._row_to_assignment(row)

    def list_by_patient(self, patient_id: int, active_only: bool = False) -> list[Assignment]:
        return self._list("patient_id", patient_id, active_only)

    def list_by_caretaker(self, caretaker_id: int, active_only: bool = False) -> list[Assignment]:
        return self._list("caretaker_id", caretaker_id, active_only)

    def _list(self, column: str, value: int, active_only: bool) -> list[Assignment]:
        query = f"SELECT * FROM assignments WHERE {column} = ?"
        if active_only:
            query += " AND is_active = 1"
        query += " ORDER BY id"
        with self._connect() as conn:
            rows = conn.execute(query, (value,)).fetchall()
        return [self._row_to_assignment(r) for r in rows]

    def is_assigned(self, caretaker_id: int, patient_id: int) -> bool:
        """True if an ACTIVE assignment links the caretaker to the patient."""
        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT 1 FROM assignments
                WHERE caretaker_id = ? AND patient_id = ? AND is_active = 1
                """,
                (caretaker_id, patient_id),
            ).fetchone()
        return row is not None

    def end_assignment(self, assignment_id: int) -> Assignment | None:
        with self._connect() as conn:
            conn.execute(
                "UPDATE assignments SET is_active = 0, end_date = ? WHERE id = ? AND is_active = 1",
                (_now_iso(), assignment_id),
            )
        logger.info("Assignment #%d ended", assignment_id)
        return self.get_assignment(assignment_id)


class MedicationDB(_SQLiteStore):
    """Medications and their intake logs."""

    _UPDATABLE = {"name", "dosage", "schedule", "instructions"}

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS medications (
                    id            INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id       INTEGER NOT NULL,
                    name          TEXT    NOT NULL,
                    dosage        TEXT    NOT NULL,
                    schedule      TEXT    NOT NULL,
                    instructions  TEXT,
                    created_at    TEXT    NOT NULL,
                    updated_at    TEXT    NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS medication_logs (
                    id             INTEGER PRIMARY KEY AUTOINCREMENT,
                    medication_id  INTEGER NOT NULL,
                    taken_at       TEXT    NOT NULL,
                    taken_by       INTEGER,
                    notes          TEXT    NOT NULL DEFAULT ''
                )
            """)
        logger.debug("Medication tables initialized at %s", self._db_path)

    @staticmethod
    def _row_to_medication(row: sqlite3.Row) -> Medication:
        return Medication(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            dosage=row["dosage"],
            schedule=row["schedule"],
            instructions=row["instructions"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    @staticmethod
    def _row_to_log(row: sqlite3.Row) -> MedicationLog:
        return MedicationLog(
            id=row["id"],
            medication_id=row["medication_id"],
            taken_at=row["taken_at"],
            taken_by=row["taken_by"],
            notes=row["notes"],
        )

    def add_medication(
        self,
        user_id: int,
        name: str,
        dosage: str,
        schedule: str,
        instructions: str | None = None,
    ) -> Medication:
        """Insert a medication. ``schedule`` is the serialized JSON array."""
        now = _now_iso()
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO medications
                    (user_id, name, dosage, schedule, instructions, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (user_id, name, dosage, schedule, instructions, now, now),
            )
            medication_id = cursor.lastrowid

        logger.info("Medication added: #%d '%s' for user %d", medication_id, name, user_id)
        return Medication(
            id=medication_id,
            user_id=user_id,
            name=name,
            dosage=dosage,
            schedule=schedule,
            instructions=instructions,
            created_at=now,
            updated_at=now,
        )

    def get_medication(self, medication_id: int) -> Medication | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM medications WHERE id = ?", (medication_id,)
            ).fetchone()
        if row is None:
            return None
        return self._row_to_medication(row)

    def list_by_user(self, user_id: int) -> list[Medication]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM medications WHERE user_id = ? ORDER BY id", (user_id,)
            ).fetchall()
        return [self._row_to_medication(r) for r in rows]

    def list_user_ids(self) -> list[int]:
        """Every user that owns at least one medication."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT DISTINCT user_id FROM medications ORDER BY user_id"
            ).fetchall()
        return [r["user_id"] for r in rows]

    def update_medication(self, medication_id: int, changes: dict) -> Medication | None:
        fields = {k: v for k, v in changes.items() if k in self._UPDATABLE}
        if fields:
            fields["updated_at"] = _now_iso()
            assignments = ", ".join(f"{k} = ?" for k in fields)
            with self._connect() as conn:
                conn.execute(
                    f"UPDATE medications SET {assignments} WHERE id = ?",
                    [*fields.values(), medication_id],
                )
            logger.info("Medication #%d updated", medication_id)
        return self.get_medication(medication_id)

    def delete_medication(self, medication_id: int) -> bool:
        """Permanently delete a medication and its logs."""
        with self._connect() as conn:
            conn.execute(
                "DELETE FROM medication_logs WHERE medication_id = ?", (medication_id,)
            )
            cursor = conn.execute(
                "DELETE FROM medications WHERE id = ?", (medication_id,)
            )
        deleted = cursor.rowcount > 0
        if deleted:
            logger.info("Medication #%d deleted", medication_id)
        return deleted

    def add_log(
        self,
        medication_id: int,
        taken_by: int | None = None,
        notes: str = "",
        taken_at: str | None = None,
    ) -> MedicationLog:
        if taken_at is None:
            taken_at = _now_iso()
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO medication_logs (medication_id, taken_at, taken_by, notes)
                VALUES (?, ?, ?, ?)
                """,
                (medication_id, taken_at, taken_by, notes),
            )
            log_id = cursor.lastrowid
        logger.info("Medication #%d logged as taken (log #%d)", medication_id, log_id)
        return MedicationLog(
            id=log_id,
            medication_id=medication_id,
            taken_at=taken_at,
            taken_by=taken_by,
            notes=notes,
        )

    def list_logs(self, medication_id: int) -> list[MedicationLog]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM medication_logs WHERE medication_id = ? ORDER BY taken_at DESC",
                (medication_id,),
            ).fetchall()
        return [self._row_to_log(r) for r in rows]


class TaskDB(_SQLiteStore):
    """Care tasks with one-way completion."""

    _UPDATABLE = {"title", "description", "due_date", "recurrence"}

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS tasks (
                    id            INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id       INTEGER NOT NULL,
                    title         TEXT    NOT NULL,
                    description   TEXT,
                    due_date      TEXT    NOT NULL,
                    recurrence    TEXT,
                    is_completed  INTEGER NOT NULL DEFAULT 0,
                    completed_at  TEXT,
                    completed_by  INTEGER,
                    created_at    TEXT    NOT NULL
                )
            """)
        logger.debug("Tasks table initialized at %s", self._db_path)

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            description=row["description"],
            due_date=datetime.fromisoformat(row["due_date"]),
            recurrence=row["recurrence"],
            is_completed=bool(row["is_completed"]),
            completed_at=row["completed_at"],
            completed_by=row["completed_by"],
            created_at=row["created_at"],
        )

    def add_task(
        self,
        user_id: int,
        title: str,
        due_date: datetime,
        description: str | None = None,
        recurrence: str | None = None,
    ) -> Task:
        now = _now_iso()
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO tasks
                    (user_id, title, description, due_date, recurrence, is_completed, created_at)
                VALUES (?, ?, ?, ?, ?, 0, ?)
                """,
                (user_id, title, description, due_date.isoformat(), recurrence, now),
            )
            task_id = cursor.lastrowid

        logger.info("Task added: #%d '%s' due %s", task_id, title, due_date.isoformat())
        return Task(
            id=task_id,
            user_id=user_id,
            title=title,
            due_date=due_date,
            description=description,
            recurrence=recurrence,
            created_at=now,
        )

    def get_task(self, task_id: int) -> Task | None:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    def list_by_user(self, user_id: int) -> list[Task]:
        """A user's tasks, soonest due first.

        Sorted on the parsed instant: stored ISO text with different UTC
        offsets does not order chronologically.
        """
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM tasks WHERE user_id = ? ORDER BY id", (user_id,)
            ).fetchall()
        tasks = [self._row_to_task(r) for r in rows]
        return sorted(tasks, key=lambda t: t.due_date.timestamp())

    def list_user_ids(self) -> list[int]:
        """Every user that owns at least one incomplete task."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT DISTINCT user_id FROM tasks WHERE is_completed = 0 ORDER BY user_id"
            ).fetchall()
        return [r["user_id"] for r in rows]

    def update_task(self, task_id: int, changes: dict) -> Task | None:
        """Partial update. Completion fields are not updatable here; see complete_task."""
        fields = {k: v for k, v in changes.items() if k in self._UPDATABLE}
        if "due_date" in fields and isinstance(fields["due_date"], datetime):
            fields["due_date"] = fields["due_date"].isoformat()
        if fields:
            assignments = ", ".join(f"{k} = ?" for k in fields)
            with self._connect() as conn:
                conn.execute(
                    f"UPDATE tasks SET {assignments} WHERE id = ?",
                    [*fields.values(), task_id],
                )
            logger.info("Task #%d updated", task_id)
        return self.get_task(task_id)

    def complete_task(self, task_id: int, completed_by: int) -> Task | None:
        """Mark a task completed. A task already completed is left untouched."""
        with self._connect() as conn:
            cursor = conn.execute(
                """
                UPDATE tasks SET is_completed = 1, completed_at = ?, completed_by = ?
                WHERE id = ? AND is_completed = 0
                """,
                (_now_iso(), completed_by, task_id),
            )
        if cursor.rowcount > 0:
            logger.info("Task #%d completed by user %d", task_id, completed_by)
        return self.get_task(task_id)

    def delete_task(self, task_id: int) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        deleted = cursor.rowcount > 0
        if deleted:
            logger.info("Task #%d deleted", task_id)
        return deleted


class NotificationDB(_SQLiteStore):
    """In-app notifications."""

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS notifications (
                    id            INTEGER PRIMARY KEY AUTOINCREMENT,
                    user_id       INTEGER NOT NULL,
                    type          TEXT    NOT NULL,
                    title         TEXT    NOT NULL,
                    message       TEXT    NOT NULL,
                    reference_id  INTEGER,
                    is_read       INTEGER NOT NULL DEFAULT 0,
                    created_at    TEXT    NOT NULL
                )
            """)
        logger.debug("Notifications table initialized at %s", self._db_path)

    @staticmethod
    def _row_to_notification(row: sqlite3.Row) -> Notification:
        return Notification(
            id=row["id"],
            user_id=row["user_id"],
            type=row["type"],
            title=row["title"],
            message=row["message"],
            reference_id=row["reference_id"],
            is_read=bool(row["is_read"]),
            created_at=row["created_at"],
        )

    def add_notification(
        self,
        user_id: int,
        type: str,
        title: str,
        message: str,
        reference_id: int | None = None,
    ) -> Notification:
        now = _now_iso()
        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO notifications
                    (user_id, type, title, message, reference_id, is_read, created_at)
                VALUES (?, ?, ?, ?, ?, 0, ?)
                """,
                (user_id, type, title, message, reference_id, now),
            )
            notification_id = cursor.lastrowid

        logger.debug("Notification #%d (%s) for user %d", notification_id, type, user_id)
        return Notification(
            id=notification_id,
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            reference_id=reference_id,
            created_at=now,
        )

    def get_notification(self, notification_id: int) -> Notification | None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM notifications WHERE id = ?", (notification_id,)
            ).fetchone()
        if row is None:
            return None
        return self._row_to_notification(row)

    def list_by_user(self, user_id: int) -> list[Notification]:
        """Newest first."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM notifications WHERE user_id = ? ORDER BY id DESC",
                (user_id,),
            ).fetchall()
        return [self._row_to_notification(r) for r in rows]

    def mark_read(self, notification_id: int) -> Notification | None:
        with self._connect() as conn:
            conn.execute(
                "UPDATE notifications SET is_read = 1 WHERE id = ?", (notification_id,)
            )
        return self.get_notification(notification_id)

    def delete_notification(self, notification_id: int) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(
                "DELETE FROM notifications WHERE id = ?", (notification_id,)
            )
        return cursor.rowcount > 0


@dataclass
class CareStores:
    """Every store, opened against the same database file."""

    users: UserDB
    profiles: CaretakerProfileDB
    assignments: AssignmentDB
    medications: MedicationDB
    tasks: TaskDB
    notifications: NotificationDB

    @classmethod
    def open(cls, db_path: str | None = None) -> CareStores:
        return cls(
            users=UserDB(db_path),
            profiles=CaretakerProfileDB(db_path),
            assignments=AssignmentDB(db_path),
            medications=MedicationDB(db_path),
            tasks=TaskDB(db_path),
            notifications=NotificationDB(db_path),
        )
