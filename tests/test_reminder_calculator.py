"""Tests for careconnect.core.reminder_calculator — pure reminder time logic."""

from datetime import datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from careconnect.core.reminder_calculator import (
    next_occurrence,
    normalize_slots,
    parse_schedule,
    parse_slot,
    seconds_until,
    serialize_schedule,
    task_reminder_time,
)

NOW = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


class TestParseSlot:
    def test_parses_hh_mm(self):
        assert parse_slot("08:30") == time(8, 30)

    def test_accepts_single_digit_hour(self):
        assert parse_slot("7:05") == time(7, 5)

    @pytest.mark.parametrize("raw", ["24:00", "12:60", "noon", "8", "08:00:00", ""])
    def test_rejects_malformed(self, raw):
        with pytest.raises(ValueError):
            parse_slot(raw)

    def test_rejects_non_string(self):
        with pytest.raises(ValueError):
            parse_slot(800)


class TestSchedules:
    def test_normalize_pads_and_dedupes(self):
        assert normalize_slots(["8:00", "20:00", "08:00"]) == ["08:00", "20:00"]

    def test_serialize_is_json_array(self):
        assert serialize_schedule(["20:00", "8:00"]) == '["20:00", "08:00"]'

    def test_serialize_rejects_bad_slot(self):
        with pytest.raises(ValueError):
            serialize_schedule(["08:00", "late"])

    def test_parse_round_trip(self):
        assert parse_schedule('["08:00", "20:00"]') == ["08:00", "20:00"]

    def test_parse_invalid_json(self):
        with pytest.raises(ValueError):
            parse_schedule("08:00, 20:00")

    def test_parse_non_list(self):
        with pytest.raises(ValueError):
            parse_schedule('{"time": "08:00"}')


class TestNextOccurrence:
    def test_passed_slot_is_tomorrow(self):
        assert next_occurrence("08:00", NOW) == datetime(2026, 3, 11, 8, 0, tzinfo=timezone.utc)

    def test_upcoming_slot_is_today(self):
        assert next_occurrence("20:00", NOW) == datetime(2026, 3, 10, 20, 0, tzinfo=timezone.utc)

    def test_slot_equal_to_now_is_tomorrow(self):
        assert next_occurrence("09:00", NOW) == NOW + timedelta(days=1)

    def test_accepts_time_with_seconds(self):
        at = next_occurrence(time(0, 0, 30), NOW)
        assert at == datetime(2026, 3, 11, 0, 0, 30, tzinfo=timezone.utc)

    def test_keeps_timezone(self):
        now = datetime(2026, 3, 10, 9, 0, tzinfo=ZoneInfo("America/New_York"))
        assert next_occurrence("10:00", now).tzinfo == now.tzinfo


class TestTaskReminderTime:
    def test_thirty_minutes_before_due(self):
        due = NOW + timedelta(hours=2)
        assert task_reminder_time(due, NOW) == due - timedelta(minutes=30)

    def test_due_within_lead_time_is_skipped(self):
        # A reminder whose instant already passed is never sent late.
        assert task_reminder_time(NOW + timedelta(minutes=20), NOW) is None

    def test_overdue_is_skipped(self):
        assert task_reminder_time(NOW - timedelta(hours=1), NOW) is None

    def test_naive_due_date_uses_now_timezone(self):
        due = datetime(2026, 3, 10, 12, 0)
        assert task_reminder_time(due, NOW) == datetime(2026, 3, 10, 11, 30, tzinfo=timezone.utc)

    def test_custom_lead(self):
        due = NOW + timedelta(hours=2)
        assert task_reminder_time(due, NOW, lead_minutes=90) == NOW + timedelta(minutes=30)


class TestSecondsUntil:
    def test_future(self):
        assert seconds_until(NOW + timedelta(minutes=5), NOW) == 300

    def test_past_clamps_to_zero(self):
        assert seconds_until(NOW - timedelta(minutes=5), NOW) == 0

    def test_across_dst_change(self):
        tz = ZoneInfo("America/New_York")
        before = datetime(2026, 3, 7, 12, 0, tzinfo=tz)
        after = datetime(2026, 3, 8, 12, 0, tzinfo=tz)
        assert seconds_until(after, before) == 23 * 3600
