from dataclasses import replace
from datetime import date, timedelta

import pytest

from src.staff_attendance.staff_attendance.attendance.model import DailyStatusRecord
from src.staff_attendance.staff_attendance.attendance.week_off.factory import week_off_rule_for
from src.staff_attendance.staff_attendance.attendance.week_off.lookback_rule import LookbackEscalationRule
from src.staff_attendance.staff_attendance.attendance.week_off.weekly_presence_rule import WeeklyPresenceRule
from src.staff_attendance.staff_attendance.core.enums import StatusCode
from src.staff_attendance.staff_attendance.core.exceptions import SequenceOrderError

P, A, WO = StatusCode.PRESENT, StatusCode.ABSENT, StatusCode.WEEK_OFF


def _records(start: date, statuses, worked_minutes: int = 480):
    return [
        DailyStatusRecord(
            user_id="u1",
            day=start + timedelta(days=i),
            status=status,
            worked_minutes=worked_minutes if status == P else 0,
        )
        for i, status in enumerate(statuses)
    ]


# 2025-06-02 is a Monday, 2025-06-08 a Sunday.
WEEK_START = date(2025, 6, 2)


def test_four_absences_escalate_the_sunday():
    records = _records(WEEK_START, [A, A, P, A, A, P, WO])
    result = LookbackEscalationRule().apply(records)
    assert result[-1].status == A
    assert result[:-1] == records[:-1]


def test_three_absences_keep_the_week_off():
    records = _records(WEEK_START, [A, A, P, A, P, P, WO])
    assert LookbackEscalationRule().apply(records)[-1].status == WO


def test_short_history_counts_what_is_there():
    # Sunday with only four earlier days in range, all absent.
    records = _records(date(2025, 6, 4), [A, A, A, A, WO])
    assert LookbackEscalationRule().apply(records)[-1].status == A


def test_input_records_are_not_mutated():
    records = _records(WEEK_START, [A, A, A, A, P, P, WO])
    LookbackEscalationRule().apply(records)
    assert records[-1].status == WO


def test_gapped_sequence_is_rejected():
    records = _records(WEEK_START, [A, A, A])
    del records[1]
    with pytest.raises(SequenceOrderError):
        LookbackEscalationRule().apply(records)


def test_mixed_users_are_rejected():
    records = _records(WEEK_START, [A, A])
    records[1] = DailyStatusRecord(user_id="u2", day=records[1].day, status=A)
    with pytest.raises(SequenceOrderError):
        WeeklyPresenceRule().apply(records)


def test_weekly_presence_keeps_first_sunday_of_month():
    # 2025-06-01 is the first Sunday of June.
    records = _records(date(2025, 5, 26), [A, A, A, A, A, A, WO])
    assert WeeklyPresenceRule().apply(records)[-1].status == WO


def test_weekly_presence_needs_four_worked_days():
    three = _records(WEEK_START, [P, P, P, A, A, A, WO])
    four = _records(WEEK_START, [P, P, P, P, A, A, WO])

    assert WeeklyPresenceRule().apply(three)[-1].status == A
    assert WeeklyPresenceRule().apply(four)[-1].status == WO


def test_weekly_presence_ignores_short_days():
    records = _records(WEEK_START, [P, P, P, P, P, A, WO], worked_minutes=120)
    assert WeeklyPresenceRule().apply(records)[-1].status == A


def test_rule_lookup_by_name():
    assert isinstance(week_off_rule_for("lookback"), LookbackEscalationRule)
    assert isinstance(week_off_rule_for("Weekly_Presence"), WeeklyPresenceRule)
    with pytest.raises(ValueError):
        week_off_rule_for("monthly")


@pytest.mark.parametrize("rule", [LookbackEscalationRule(), WeeklyPresenceRule()])
def test_non_sunday_week_off_is_left_alone(rule):
    # Saturday 2025-06-14 after six absences.
    records = _records(date(2025, 6, 8), [A, A, A, A, A, A, WO])
    assert records[-1].day.strftime("%A") == "Saturday"
    assert rule.apply(records)[-1].status == WO


def test_weekly_presence_count_carries_over_a_worked_sunday():
    # Thu 2025-06-05 .. Sun 2025-06-15; the worked Sunday 06-08 does not close the week.
    records = _records(date(2025, 6, 5), [P, P, A, StatusCode.WEEKEND_PRESENT, P, A, A, A, A, A, WO])
    records[3] = replace(records[3], worked_minutes=480)

    result = WeeklyPresenceRule().apply(records)
    assert result[3].status == StatusCode.WEEKEND_PRESENT
    assert result[-1].status == WO


def test_weekly_presence_count_restarts_after_an_idle_sunday():
    records = _records(date(2025, 6, 5), [P, P, P, WO, P, A, A, A, A, A, WO])
    assert WeeklyPresenceRule().apply(records)[-1].status == A
