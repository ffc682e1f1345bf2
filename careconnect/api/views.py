"""JSON shapes returned by the HTTP API."""

from __future__ import annotations

import logging
from dataclasses import asdict

from careconnect.core.reminder_calculator import parse_schedule
from careconnect.data.models import CaretakerProfile, Medication, User

logger = logging.getLogger(__name__)


def user_view(user: User) -> dict:
    return asdict(user)


def contact_view(user: User) -> dict:
    """What one party of an assignment sees about the other."""
    return {
        "id": user.id,
        "full_name": user.full_name,
        "email": user.email,
        "phone": user.phone,
        "role": user.role,
    }


def caretaker_view(
    user: User | None,
    profile: CaretakerProfile,
    match_score: float | None = None,
) -> dict:
    data = asdict(profile)
    data["full_name"] = user.full_name if user else None
    data["email"] = user.email if user else None
    if match_score is not None:
        data["match_score"] = match_score
    return data


def medication_view(medication: Medication) -> dict:
    data = asdict(medication)
    try:
        data["schedule"] = parse_schedule(medication.schedule)
    except ValueError:
        logger.warning("Medication #%d has an unreadable schedule", medication.id)
        data["schedule"] = []
    return data
