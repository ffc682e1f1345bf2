"""
CareConnect — Data Models.

Plain records returned by the SQLite stores. Patients own medications and
tasks; caretakers own a single bookable profile. Assignments link the two.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

PATIENT = "patient"
CARETAKER = "caretaker"
ROLES = (PATIENT, CARETAKER)

NOTIFICATION_TYPES = ("medication", "task", "assignment", "system")


@dataclass
class User:
    """A registered patient or caretaker."""

    id: int
    username: str
    email: str
    full_name: str
    role: str                  # "patient" | "caretaker"
    phone: str | None = None
    created_at: str = ""

    @property
    def is_caretaker(self) -> bool:
        return self.role == CARETAKER


@dataclass
class CaretakerProfile:
    """Bookable attributes of a caretaker, searched and ranked by matching."""

    user_id: int
    bio: str
    price_per_day: float
    location: str                                  # e.g. "Boston, MA"
    service_areas: list[str] = field(default_factory=list)
    specializations: list[str] = field(default_factory=list)
    gender: str = "not specified"
    age: int | None = None
    years_experience: int | None = None
    is_certified: bool = False
    is_background_checked: bool = False
    is_available: bool = True
    provides_live_location: bool = False
    rating: float | None = None                    # 0-5, None until reviewed
    review_count: int = 0
    image_url: str | None = None
    id: int | None = None


@dataclass
class Assignment:
    """An active (or ended) patient-caretaker pairing."""

    id: int
    patient_id: int
    caretaker_id: int
    start_date: str
    end_date: str | None = None
    is_active: bool = True


@dataclass
class Medication:
    """A medication with a daily schedule.

    ``schedule`` is kept exactly as persisted: a JSON array of "HH:MM"
    strings, e.g. '["08:00", "20:00"]'.
    """

    id: int
    user_id: int
    name: str
    dosage: str
    schedule: str
    instructions: str | None = None
    created_at: str = ""
    updated_at: str = ""


@dataclass
class MedicationLog:
    id: int
    medication_id: int
    taken_at: str
    taken_by: int | None = None    # caretaker id, None if self-administered
    notes: str = ""


@dataclass
class Task:
    """A one-off care task. Completion is one-way."""

    id: int
    user_id: int
    title: str
    due_date: datetime
    description: str | None = None
    recurrence: str | None = None   # "daily" | "weekly" | ... (informational)
    is_completed: bool = False
    completed_at: str | None = None
    completed_by: int | None = None
    created_at: str = ""


@dataclass
class Notification:
    id: int
    user_id: int
    type: str                       # one of NOTIFICATION_TYPES
    title: str
    message: str
    reference_id: int | None = None
    is_read: bool = False
    created_at: str = ""
