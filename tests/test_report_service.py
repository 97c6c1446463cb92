from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.staff_attendance.staff_attendance.attendance.model import AttendanceEvent
from src.staff_attendance.staff_attendance.common.request_gate import LatestRequestGate
from src.staff_attendance.staff_attendance.core.enums import EventType, RecordType, UserCategory
from src.staff_attendance.staff_attendance.core.exceptions import (
    NotFoundError,
    SupersededRequestError,
    ValidationError,
)
from src.staff_attendance.staff_attendance.holidays.model import FixedHoliday, RecurringHolidayRule
from src.staff_attendance.staff_attendance.leaves.model import LeaveInterval
from src.staff_attendance.staff_attendance.payroll.service import PayrollReportService
from src.staff_attendance.staff_attendance.users.model import StaffMember

MONDAY = date(2025, 6, 2)
SUNDAY = date(2025, 6, 8)


class InMemoryEventRepo:
    def __init__(self, events=None, on_fetch=None):
        self._events = list(events or [])
        self._on_fetch = on_fetch
        self.calls = []

    def fetch_events(self, *, user_id, start, end):
        self.calls.append({"user_id": user_id, "start": start, "end": end})
        if self._on_fetch:
            self._on_fetch()
        return [
            e for e in self._events
            if start <= e.timestamp <= end and (user_id is None or e.user_id.lower() == user_id.lower())
        ]


class InMemoryLeaveRepo:
    def __init__(self, leaves=None):
        self._leaves = list(leaves or [])

    def fetch_approved_leaves(self, *, start_date, end_date, user_id=None):
        return [l for l in self._leaves if l.start_date <= end_date and l.end_date >= start_date]


class InMemoryHolidayRepo:
    def __init__(self, fixed=None, recurring=None):
        self._fixed = list(fixed or [])
        self._recurring = list(recurring or [])

    def fetch_fixed_holidays(self):
        return self._fixed

    def fetch_recurring_rules(self):
        return self._recurring

    def fetch_pool_holidays(self, user_id=None):
        return []

    def fetch_configured_holidays(self, category: UserCategory):
        return []


class InMemoryUserRepo:
    def __init__(self, users):
        self._users = {u.user_id: u for u in users}

    def get_by_id(self, user_id):
        return self._users.get(user_id)

    def list_staff(self):
        return list(self._users.values())


STAFF = [
    StaffMember(user_id="u1", name="Asha", role="technician"),
    StaffMember(user_id="u2", name="Ravi", role="hr"),
    StaffMember(user_id="m1", name="Boss", role="management"),
]


def _day(day: date, hours: float = 9, user_id: str = "u1", check_out: bool = True, location="Plant 1"):
    start = datetime.combine(day, datetime.min.time()).replace(hour=9)
    events = [AttendanceEvent(user_id=user_id, timestamp=start, event_type=EventType.CHECK_IN, location_name=location)]
    if check_out:
        events.append(
            AttendanceEvent(
                user_id=user_id,
                timestamp=start + timedelta(minutes=int(hours * 60)),
                event_type=EventType.CHECK_OUT,
                location_name=location,
            )
        )
    return events


def _service(events=(), leaves=(), fixed=(), recurring=(), gate=None, on_fetch=None):
    return PayrollReportService(
        InMemoryEventRepo(events, on_fetch=on_fetch),
        InMemoryLeaveRepo(leaves),
        InMemoryHolidayRepo(fixed, recurring),
        InMemoryUserRepo(STAFF),
        fetch_workers=2,
        gate=gate,
    )


def test_monthly_report_escalates_sunday_after_four_absences():
    svc = _service(events=_day(MONDAY) + _day(MONDAY + timedelta(days=1)))

    rows = svc.build_monthly_report(start=MONDAY, end=SUNDAY, user_id="u1")

    assert len(rows) == 1
    agg = rows[0].aggregate
    assert agg.status_tokens == ["P", "P", "A", "A", "A", "A", "A"]
    assert agg.counters.present_days == 2
    assert agg.counters.absent_days == 5
    assert agg.total_payable_days == 2.0
    assert agg.total_ot_hours == 2.0
    assert agg.shift_counts == {"GS": 2}


def test_leave_and_holiday_days_keep_the_week_off():
    svc = _service(
        events=_day(MONDAY) + _day(MONDAY + timedelta(days=1)),
        leaves=[LeaveInterval(user_id="u1", start_date=date(2025, 6, 4), end_date=date(2025, 6, 5), leave_type="Sick")],
        fixed=[FixedHoliday(date="06-06", name="Plant holiday")],
    )

    row = svc.build_monthly_report(start=MONDAY, end=SUNDAY, user_id="u1")[0]

    assert row.aggregate.status_tokens == ["P", "P", "S/L", "S/L", "H", "A", "W/O"]
    assert row.aggregate.total_payable_days == 6.0
    assert row.aggregate.counters.day_total() == 7


def test_absences_in_the_lookback_buffer_escalate_the_first_sunday():
    # 2025-06-01 is a Sunday; the six days before it are outside the range.
    svc = _service(events=_day(date(2025, 6, 2)))
    row = svc.build_monthly_report(start=date(2025, 6, 1), end=date(2025, 6, 2), user_id="u1")[0]
    assert row.aggregate.status_tokens == ["A", "P"]


def test_management_is_excluded_and_role_filter_applies():
    svc = _service()

    rows = svc.build_monthly_report(start=MONDAY, end=SUNDAY)
    assert sorted(r.user_id for r in rows) == ["u1", "u2"]

    rows = svc.build_monthly_report(start=MONDAY, end=SUNDAY, role="HR")
    assert [r.user_id for r in rows] == ["u2"]


def test_status_filter_keeps_rows_containing_token():
    svc = _service(
        events=_day(MONDAY),
        leaves=[LeaveInterval(user_id="u2", start_date=MONDAY, end_date=MONDAY, leave_type="Loss of Pay")],
    )

    assert [r.user_id for r in svc.build_monthly_report(start=MONDAY, end=MONDAY, status="P")] == ["u1"]
    assert [r.user_id for r in svc.build_monthly_report(start=MONDAY, end=MONDAY, status="LOP")] == ["u2"]
    with pytest.raises(ValidationError):
        svc.build_monthly_report(start=MONDAY, end=MONDAY, status="Q")


def test_reversed_range_is_rejected():
    with pytest.raises(ValidationError):
        _service().build_monthly_report(start=SUNDAY, end=MONDAY)


def test_events_are_fetched_with_lookback_buffer():
    svc = _service()
    svc.build_monthly_report(start=MONDAY, end=SUNDAY, user_id="u1")
    call = svc._events.calls[0]
    assert call["start"].date() == MONDAY - timedelta(days=7)
    assert call["end"].date() == SUNDAY
    assert call["user_id"] == "u1"


def test_basic_report_rows_and_record_type_filter():
    tuesday = MONDAY + timedelta(days=1)
    svc = _service(events=_day(MONDAY, hours=9.5) + _day(tuesday, check_out=False))

    rows = svc.build_basic_report(start=MONDAY, end=tuesday, user_id="u1")
    assert rows[0] == {
        "user_id": "u1",
        "user_name": "Asha",
        "date": "2025-06-02",
        "status": "P",
        "check_in": "09:00",
        "check_out": "18:30",
        "duration": "9h 30m",
    }
    assert rows[1]["check_out"] == "" and rows[1]["duration"] == ""

    missing = svc.build_basic_report(start=MONDAY, end=tuesday, user_id="u1", record_type=RecordType.MISSING_CHECKOUT)
    assert [r["date"] for r in missing] == ["2025-06-03"]


def test_attendance_log_location_fallbacks_and_order():
    events = [
        AttendanceEvent(user_id="u1", timestamp=datetime(2025, 6, 2, 18, 0), event_type=EventType.CHECK_OUT,
                        latitude=18.52043, longitude=73.85674),
        AttendanceEvent(user_id="u1", timestamp=datetime(2025, 6, 2, 9, 0), event_type=EventType.CHECK_IN),
        AttendanceEvent(user_id="m1", timestamp=datetime(2025, 6, 2, 9, 0), event_type=EventType.CHECK_IN),
    ]
    rows = _service(events=events).build_attendance_log(start=MONDAY, end=MONDAY)

    assert [(r["time"], r["type"], r["location_name"]) for r in rows] == [
        ("09:00:00", "check-in", "N/A"),
        ("18:00:00", "check-out", "18.5204, 73.8567"),
    ]


def test_employee_view_counts_and_newest_first():
    svc = _service(events=_day(MONDAY, hours=9.5) + _day(MONDAY + timedelta(days=1)))

    view = svc.build_employee_view(user_id="u1", start=MONDAY, end=SUNDAY, today=date(2025, 6, 5))

    assert view.logs[0]["date"] == "08 Jun, 2025"
    assert view.logs[-1]["check_in"] == "09:00 AM"
    assert view.logs[-1]["check_out"] == "06:30 PM"
    assert view.present == 2
    assert view.absent == 2
    assert view.ot_hours == 2.5


def test_employee_view_unknown_user():
    with pytest.raises(NotFoundError):
        _service().build_employee_view(user_id="nobody", start=MONDAY, end=SUNDAY)


def test_dashboard_counts_today_and_trend():
    svc = _service(
        events=_day(MONDAY, hours=8) + _day(MONDAY, hours=6, user_id="u2"),
        leaves=[LeaveInterval(user_id="u2", start_date=MONDAY + timedelta(days=1), end_date=MONDAY + timedelta(days=1),
                              leave_type="Sick")],
    )

    data = svc.build_dashboard(start=MONDAY, end=MONDAY + timedelta(days=1), today=MONDAY + timedelta(days=1))

    assert data.total_employees == 2
    assert data.present_today == 0
    assert data.on_leave_today == 1
    assert data.absent_today == 1
    assert data.labels == ["02 Jun", "03 Jun"]
    assert data.present_trend == [2, 0]
    assert data.absent_trend == [0, 1]
    assert data.productivity_trend == [7.0, 0.0]


def test_superseded_request_is_discarded():
    gate = LatestRequestGate()
    key = ("client-1", "monthly")
    fired = []

    def newer_request_arrives():
        if not fired:
            fired.append(True)
            gate.begin(key)

    svc = _service(gate=gate, on_fetch=newer_request_arrives)

    with pytest.raises(SupersededRequestError):
        svc.build_monthly_report(start=MONDAY, end=SUNDAY, request_key=key)

    # The next run holds the newest ticket and completes.
    assert svc.build_monthly_report(start=MONDAY, end=SUNDAY, request_key=key)
    assert len(gate) == 0


def test_completed_and_failed_runs_release_their_gate_entries():
    gate = LatestRequestGate()
    svc = _service(gate=gate)

    for n in range(50):
        svc.build_monthly_report(start=MONDAY, end=MONDAY, request_key=(f"client-{n}", "monthly"))
        svc.build_employee_view(user_id="u1", start=MONDAY, end=MONDAY, request_key=(f"client-{n}", "employee"))
    with pytest.raises(ValidationError):
        svc.build_basic_report(start=MONDAY, end=MONDAY, status="Q", request_key=("client-x", "basic"))

    assert len(gate) == 0


def test_fetch_failure_releases_gate_entry():
    gate = LatestRequestGate()

    def broken():
        raise RuntimeError("db down")

    svc = _service(gate=gate, on_fetch=broken)
    with pytest.raises(RuntimeError):
        svc.build_monthly_report(start=MONDAY, end=MONDAY, request_key=("client-1", "monthly"))
    assert len(gate) == 0


def test_worked_second_saturday_is_holiday_present_for_office_staff():
    second_saturday = date(2025, 6, 14)
    svc = _service(
        events=_day(second_saturday, user_id="u2") + _day(second_saturday, user_id="u1"),
        recurring=[RecurringHolidayRule(day="Saturday", n=2, type=UserCategory.OFFICE)],
    )

    rows = {r.user_id: r.aggregate for r in svc.build_monthly_report(start=second_saturday, end=second_saturday)}

    assert rows["u2"].status_tokens == ["H/P"]
    assert rows["u2"].counters.holiday_presents == 1
    # Field staff do not follow the office rule.
    assert rows["u1"].status_tokens == ["P"]
