from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Hashable, Optional, Sequence

from ..attendance.classifier import DailyStatusClassifier, group_events_by_day
from ..attendance.model import AttendanceEvent, DailyStatusRecord
from ..attendance.repository import AttendanceEventRepository
from ..attendance.week_off.base import WeekOffRule, trim_to_range
from ..attendance.week_off.lookback_rule import LookbackEscalationRule
from ..common.datetime_utils import each_day, format_duration, local_day, local_time, round_half_up
from ..common.request_gate import LatestRequestGate
from ..common.validators import require_date_range
from ..core.constants import DEFAULT_FETCH_WORKERS, EXCLUDED_REPORT_ROLES, LOOKBACK_BUFFER_DAYS
from ..core.enums import PRESENT_STATUSES, EventType, RecordType, StatusCode, UserCategory
from ..core.exceptions import NotFoundError, SupersededRequestError, ValidationError
from ..holidays.repository import HolidayRepository
from ..holidays.resolver import HolidayCalendar, same_user
from ..leaves.model import LeaveInterval
from ..leaves.repository import LeaveRepository
from ..users.model import StaffMember
from ..users.repository import UserRepository
from .aggregator import MonthlyAggregate, aggregate

logger = logging.getLogger(__name__)

LOSS_OF_PAY_FILTER = "LOP"


@dataclass(frozen=True)
class ReportInputs:
    events: Sequence[AttendanceEvent]
    leaves: Sequence[LeaveInterval]
    calendar: HolidayCalendar


@dataclass(frozen=True)
class MonthlyReportRow:
    user_id: str
    user_name: str
    aggregate: MonthlyAggregate
    records: tuple[DailyStatusRecord, ...] = ()

    def to_dict(self) -> dict:
        return {"user_name": self.user_name, **self.aggregate.to_dict()}


@dataclass(frozen=True)
class EmployeeAttendanceView:
    user_id: str
    logs: list[dict]
    present: int
    absent: int
    ot_hours: float

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "logs": self.logs,
            "stats": {"present": self.present, "absent": self.absent, "ot": self.ot_hours},
        }


@dataclass(frozen=True)
class DashboardData:
    total_employees: int
    present_today: int
    absent_today: int
    on_leave_today: int
    labels: list[str]
    present_trend: list[int]
    absent_trend: list[int]
    productivity_trend: list[float]

    def to_dict(self) -> dict:
        return {
            "total_employees": self.total_employees,
            "present_today": self.present_today,
            "absent_today": self.absent_today,
            "on_leave_today": self.on_leave_today,
            "attendance_trend": {
                "labels": self.labels,
                "present": self.present_trend,
                "absent": self.absent_trend,
            },
            "productivity_trend": {"labels": self.labels, "hours": self.productivity_trend},
        }


class PayrollReportService:
    """Builds the attendance/payroll reports from already-fetched data.

    Per user: classify every day of [start - 7 days, end] in order, run the
    week-off rule over that sequence, drop the buffer, then aggregate or
    flatten. The fetches are independent and run concurrently.
    """

    def __init__(
        self,
        events: AttendanceEventRepository,
        leaves: LeaveRepository,
        holidays: HolidayRepository,
        users: UserRepository,
        *,
        classifier: Optional[DailyStatusClassifier] = None,
        week_off_rule: Optional[WeekOffRule] = None,
        fetch_workers: int = DEFAULT_FETCH_WORKERS,
        tz: Optional[tzinfo] = None,
        gate: Optional[LatestRequestGate] = None,
    ):
        self._events = events
        self._leaves = leaves
        self._holidays = holidays
        self._users = users
        self._classifier = classifier or DailyStatusClassifier()
        self._week_off_rule = week_off_rule or LookbackEscalationRule()
        self._fetch_workers = max(int(fetch_workers), 1)
        self._tz = tz
        self._gate = gate or LatestRequestGate()

    # ------------------------------------------------------------------ inputs

    def _window(self, start: date, end: date) -> tuple[datetime, datetime]:
        return (
            datetime.combine(start, time.min, tzinfo=self._tz),
            datetime.combine(end, time.max, tzinfo=self._tz),
        )

    def fetch_inputs(self, *, start: date, end: date, user_id: Optional[str] = None) -> ReportInputs:
        """Fetch events, leaves and every holiday source for [start, end] concurrently."""
        window_start, window_end = self._window(start, end)
        with ThreadPoolExecutor(max_workers=self._fetch_workers) as pool:
            events_f = pool.submit(self._events.fetch_events, user_id=user_id, start=window_start, end=window_end)
            leaves_f = pool.submit(self._leaves.fetch_approved_leaves, start_date=start, end_date=end, user_id=user_id)
            pool_f = pool.submit(self._holidays.fetch_pool_holidays, user_id)
            fixed_f = pool.submit(self._holidays.fetch_fixed_holidays)
            recurring_f = pool.submit(self._holidays.fetch_recurring_rules)
            configured_f = {c: pool.submit(self._holidays.fetch_configured_holidays, c) for c in UserCategory}

            inputs = ReportInputs(
                events=list(events_f.result()),
                leaves=list(leaves_f.result()),
                calendar=HolidayCalendar(
                    fixed=tuple(fixed_f.result()),
                    recurring=tuple(recurring_f.result()),
                    pool=tuple(pool_f.result()),
                    configured={c: tuple(f.result()) for c, f in configured_f.items()},
                ),
            )

        logger.info(
            "Fetched report inputs %s..%s user=%s: %d events, %d leaves",
            start, end, user_id or "all", len(inputs.events), len(inputs.leaves),
        )
        return inputs

    def _target_users(self, *, user_id: Optional[str] = None, role: Optional[str] = None) -> list[StaffMember]:
        staff = [u for u in self._users.list_staff() if (u.role or "").lower() not in EXCLUDED_REPORT_ROLES]
        if user_id and user_id != "all":
            staff = [u for u in staff if same_user(u.user_id, user_id)]
        if role and role != "all":
            staff = [u for u in staff if (u.role or "").lower() == role.strip().lower()]
        return staff

    # ---------------------------------------------------------------- pipeline

    def daily_records(
        self,
        user: StaffMember,
        *,
        start: date,
        end: date,
        inputs: ReportInputs,
        events_by_day: Optional[dict] = None,
    ) -> list[DailyStatusRecord]:
        """Final per-day records of one user for [start, end]."""
        buffer_start = start - timedelta(days=LOOKBACK_BUFFER_DAYS)
        if events_by_day is None:
            events_by_day = group_events_by_day(inputs.events, self._tz)

        records = self._classifier.classify_days(
            user=user,
            days=each_day(buffer_start, end),
            events_by_day=events_by_day,
            leaves=inputs.leaves,
            calendar=inputs.calendar.for_user(user.user_id),
        )
        records = self._week_off_rule.apply(records)
        return trim_to_range(records, start)

    @contextmanager
    def _latest_only(self, request_key: Optional[Hashable]):
        """Yield a check that raises once a newer run for the same key started.

        The key's gate entry is released when the run ends, however it ends.
        """
        if request_key is None:
            yield lambda: None
            return

        ticket = self._gate.begin(request_key)

        def ensure_latest() -> None:
            if not self._gate.is_latest(request_key, ticket):
                logger.info("Discarding superseded report request %r (ticket %d)", request_key, ticket)
                raise SupersededRequestError("Yêu cầu báo cáo đã được thay thế bởi yêu cầu mới hơn")

        try:
            yield ensure_latest
        finally:
            self._gate.finish(request_key, ticket)

    # ----------------------------------------------------------------- reports

    def build_monthly_report(
        self,
        *,
        start: date,
        end: date,
        user_id: Optional[str] = None,
        role: Optional[str] = None,
        status: Optional[str] = None,
        request_key: Optional[Hashable] = None,
    ) -> list[MonthlyReportRow]:
        require_date_range(start, end)
        status_filter = _parse_status_filter(status)

        with self._latest_only(request_key) as ensure_latest:
            users = self._target_users(user_id=user_id, role=role)
            inputs = self.fetch_inputs(
                start=start - timedelta(days=LOOKBACK_BUFFER_DAYS),
                end=end,
                user_id=user_id if user_id and user_id != "all" else None,
            )
            events_by_day = group_events_by_day(inputs.events, self._tz)

            rows = []
            for user in users:
                records = self.daily_records(user, start=start, end=end, inputs=inputs, events_by_day=events_by_day)
                row = MonthlyReportRow(
                    user_id=user.user_id,
                    user_name=user.name,
                    aggregate=aggregate(records, user_id=user.user_id, tz=self._tz),
                    records=tuple(records),
                )
                if _row_matches(row.records, status_filter):
                    rows.append(row)

            ensure_latest()

        logger.info("Monthly report %s..%s: %d rows", start, end, len(rows))
        return rows

    def build_basic_report(
        self,
        *,
        start: date,
        end: date,
        user_id: Optional[str] = None,
        role: Optional[str] = None,
        status: Optional[str] = None,
        record_type: RecordType = RecordType.ALL,
        request_key: Optional[Hashable] = None,
    ) -> list[dict]:
        require_date_range(start, end)
        status_filter = _parse_status_filter(status)
        record_type = RecordType(record_type)

        with self._latest_only(request_key) as ensure_latest:
            users = self._target_users(user_id=user_id, role=role)
            inputs = self.fetch_inputs(
                start=start - timedelta(days=LOOKBACK_BUFFER_DAYS),
                end=end,
                user_id=user_id if user_id and user_id != "all" else None,
            )
            events_by_day = group_events_by_day(inputs.events, self._tz)

            rows: list[dict] = []
            for user in users:
                for record in self.daily_records(user, start=start, end=end, inputs=inputs, events_by_day=events_by_day):
                    if not _row_matches((record,), status_filter):
                        continue
                    if not _record_type_matches(record, record_type):
                        continue
                    rows.append(self._basic_row(user, record))

            ensure_latest()

        logger.info("Basic report %s..%s: %d rows", start, end, len(rows))
        return rows

    def _basic_row(self, user: StaffMember, record: DailyStatusRecord) -> dict:
        check_in = local_time(record.check_in, self._tz).strftime("%H:%M") if record.check_in else ""
        check_out = local_time(record.check_out, self._tz).strftime("%H:%M") if record.check_out else ""
        duration = format_duration(record.worked_minutes) if record.check_in and record.check_out else ""
        return {
            "user_id": user.user_id,
            "user_name": user.name,
            "date": record.day.strftime("%Y-%m-%d"),
            "status": record.status.token,
            "check_in": check_in,
            "check_out": check_out,
            "duration": duration,
        }

    def build_attendance_log(
        self,
        *,
        start: date,
        end: date,
        user_id: Optional[str] = None,
        role: Optional[str] = None,
    ) -> list[dict]:
        require_date_range(start, end)
        users = {str(u.user_id).strip().lower(): u for u in self._target_users(user_id=user_id, role=role)}
        window_start, window_end = self._window(start, end)
        events = self._events.fetch_events(
            user_id=user_id if user_id and user_id != "all" else None,
            start=window_start,
            end=window_end,
        )

        rows = []
        for event in events:
            user = users.get(str(event.user_id).strip().lower())
            if user is None:
                continue
            ts = local_time(event.timestamp, self._tz)
            rows.append(
                {
                    "user_name": user.name or "Unknown",
                    "date": ts.strftime("%Y-%m-%d"),
                    "time": ts.strftime("%H:%M:%S"),
                    "type": EventType(event.event_type).value,
                    "location_name": _location_label(event),
                }
            )
        rows.sort(key=lambda r: (r["date"], r["time"]))
        return rows

    def build_employee_view(
        self,
        *,
        user_id: str,
        start: date,
        end: date,
        today: Optional[date] = None,
        request_key: Optional[Hashable] = None,
    ) -> EmployeeAttendanceView:
        require_date_range(start, end)
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Nhân viên không tồn tại")
        today = today or date.today()

        with self._latest_only(request_key) as ensure_latest:
            inputs = self.fetch_inputs(
                start=start - timedelta(days=LOOKBACK_BUFFER_DAYS), end=end, user_id=user.user_id
            )
            records = self.daily_records(user, start=start, end=end, inputs=inputs)
            ensure_latest()

        present = sum(1 for r in records if r.status in PRESENT_STATUSES)
        absent = sum(1 for r in records if r.status == StatusCode.ABSENT and r.day <= today)
        ot_hours = round_half_up(sum(r.ot_hours for r in records), 1)

        logs = [
            {
                "date": r.day.strftime("%d %b, %Y"),
                "day": r.weekday,
                "check_in": local_time(r.check_in, self._tz).strftime("%I:%M %p") if r.check_in else "-",
                "check_out": local_time(r.check_out, self._tz).strftime("%I:%M %p") if r.check_out else "-",
                "status": r.status.token,
                "ot": r.ot_hours,
            }
            for r in reversed(records)
        ]
        return EmployeeAttendanceView(user_id=user.user_id, logs=logs, present=present, absent=absent, ot_hours=ot_hours)

    def build_dashboard(self, *, start: date, end: date, today: Optional[date] = None) -> DashboardData:
        require_date_range(start, end)
        today = today or date.today()
        staff = self._target_users()
        total = len(staff)
        staff_keys = {str(u.user_id).strip().lower() for u in staff}

        query_start, query_end = min(start, today), max(end, today)
        window_start, window_end = self._window(query_start, query_end)
        with ThreadPoolExecutor(max_workers=self._fetch_workers) as pool:
            events_f = pool.submit(self._events.fetch_events, user_id=None, start=window_start, end=window_end)
            leaves_f = pool.submit(self._leaves.fetch_approved_leaves, start_date=query_start, end_date=query_end)
            events = [e for e in events_f.result() if str(e.user_id).strip().lower() in staff_keys]
            leaves = [l for l in leaves_f.result() if str(l.user_id).strip().lower() in staff_keys]

        events_by_day = group_events_by_day(events, self._tz)

        def present_on(day: date) -> set[str]:
            return {user_key for (user_key, d) in events_by_day if d == day}

        def on_leave(day: date) -> set[str]:
            return {str(l.user_id).strip().lower() for l in leaves if l.covers(day)}

        present_today = len(present_on(today))
        on_leave_today = len(on_leave(today))

        labels, present_trend, absent_trend, productivity = [], [], [], []
        for day in each_day(start, end):
            present_users = present_on(day)
            labels.append(day.strftime("%d %b"))
            present_trend.append(len(present_users))
            absent_trend.append(max(0, total - len(present_users) - len(on_leave(day))))

            total_hours = 0.0
            for user_key in present_users:
                activity = self._classifier.summarize_activity(events_by_day[(user_key, day)])
                if activity.first_check_in and activity.last_check_out:
                    total_hours += activity.worked_minutes / 60
            productivity.append(round_half_up(total_hours / len(present_users), 1) if present_users else 0.0)

        return DashboardData(
            total_employees=total,
            present_today=present_today,
            absent_today=max(0, total - present_today - on_leave_today),
            on_leave_today=on_leave_today,
            labels=labels,
            present_trend=present_trend,
            absent_trend=absent_trend,
            productivity_trend=productivity,
        )


def _parse_status_filter(status: Optional[str]) -> Optional[str]:
    """Normalize a status filter to a token; ``None`` means no filter."""
    if not status or status.strip().lower() == "all":
        return None
    value = status.strip().upper()
    if value == LOSS_OF_PAY_FILTER:
        return LOSS_OF_PAY_FILTER
    try:
        return StatusCode.from_token(value).token
    except ValueError:
        raise ValidationError(f"Trạng thái không hợp lệ: {status}")


def _row_matches(records: Sequence[DailyStatusRecord], status_filter: Optional[str]) -> bool:
    if status_filter is None:
        return True
    if status_filter == LOSS_OF_PAY_FILTER:
        return any(r.is_loss_of_pay for r in records)
    return any(r.status.token == status_filter for r in records)


def _record_type_matches(record: DailyStatusRecord, record_type: RecordType) -> bool:
    has_in = record.check_in is not None
    has_out = record.check_out is not None
    if record_type == RecordType.COMPLETE:
        return has_in and has_out
    if record_type == RecordType.MISSING_CHECKOUT:
        return has_in and not has_out
    if record_type == RecordType.MISSING_CHECKIN:
        return not has_in and has_out
    if record_type == RecordType.INCOMPLETE:
        return not has_in or not has_out
    return True


def _location_label(event: AttendanceEvent) -> str:
    if event.location_name:
        return event.location_name
    if event.latitude is not None and event.longitude is not None:
        return f"{event.latitude:.4f}, {event.longitude:.4f}"
    return "N/A"
