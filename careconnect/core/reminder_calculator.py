"""Reminder time calculator — pure business logic.

Parses medication schedules ("HH:MM" slots persisted as a JSON array) and
computes when the next medication or task reminder should fire.

No I/O: this module only transforms data.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, time, timedelta

logger = logging.getLogger(__name__)

_SLOT_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_slot(raw: str) -> time:
    """Parse an "HH:MM" 24-hour slot into a time of day.

    Raises ValueError on malformed input.
    """
    if not isinstance(raw, str):
        raise ValueError(f"Schedule slot must be a string, got {type(raw).__name__}")
    match = _SLOT_RE.match(raw.strip())
    if match is None:
        raise ValueError(f"Schedule slot is not HH:MM: {raw!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Hour/minute out of range: {raw!r}")
    return time(hour, minute)


def normalize_slots(slots: list[str]) -> list[str]:
    """Validate slots and return them as zero-padded, de-duplicated "HH:MM".

    Order is preserved; the first occurrence of a repeated slot wins.
    """
    seen: list[str] = []
    for raw in slots:
        slot = parse_slot(raw).strftime("%H:%M")
        if slot not in seen:
            seen.append(slot)
    return seen


def serialize_schedule(slots: list[str]) -> str:
    """Validate and serialize slots to the persisted JSON text form."""
    return json.dumps(normalize_slots(slots))


def parse_schedule(raw: str) -> list[str]:
    """Decode a persisted schedule into its list of slot strings.

    Individual slots are NOT validated here; a bad slot only affects itself
    (see next_occurrence). Raises ValueError if the text is not a JSON array.
    """
    try:
        decoded = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ValueError(f"Schedule is not valid JSON: {raw!r}") from exc
    if not isinstance(decoded, list):
        raise ValueError(f"Schedule is not a list: {raw!r}")
    return decoded


def next_occurrence(slot: str | time, now: datetime) -> datetime:
    """Next instant at which a daily slot occurs, strictly after ``now``.

    Today at the slot time if it has not passed yet, otherwise tomorrow.
    The result carries ``now``'s tzinfo.
    """
    at = parse_slot(slot) if isinstance(slot, str) else slot
    candidate = now.replace(
        hour=at.hour, minute=at.minute, second=at.second, microsecond=0,
    )
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate


def task_reminder_time(
    due_date: datetime,
    now: datetime,
    lead_minutes: int = 30,
) -> datetime | None:
    """When to remind about a task due at ``due_date``, or None.

    Returns None when the task is already due, or when the reminder instant
    (``lead_minutes`` before due) has already passed. A missed reminder is
    not sent late.
    """
    if due_date.tzinfo is None and now.tzinfo is not None:
        due_date = due_date.replace(tzinfo=now.tzinfo)

    if due_date <= now:
        return None
    reminder = due_date - timedelta(minutes=lead_minutes)
    if reminder <= now:
        return None
    return reminder


def seconds_until(target: datetime, now: datetime) -> float:
    """Real elapsed seconds between two instants, never negative.

    Uses timestamps rather than subtraction so DST transitions between
    ``now`` and ``target`` are accounted for.
    """
    return max(0.0, target.timestamp() - now.timestamp())
