from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .attendance.classifier import DailyStatusClassifier
from .attendance.factory import DayStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceEventRepository
from .attendance.repository import AttendanceEventRepository
from .attendance.week_off.factory import week_off_rule_for
from .common.datetime_utils import load_timezone
from .common.request_gate import LatestRequestGate
from .core.constants import DEFAULT_FETCH_WORKERS
from .core.enums import LeavePrecedence, StatusCode
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PayrollReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    events_repo: AttendanceEventRepository
    leaves_repo: LeaveRepository
    holidays_repo: HolidayRepository

    payroll_report_service: PayrollReportService
    conn: Optional[DatabaseConnection] = None


def build_report_service(
    *,
    events_repo: AttendanceEventRepository,
    leaves_repo: LeaveRepository,
    holidays_repo: HolidayRepository,
    users_repo: UserRepository,
    settings: Mapping[str, Any],
) -> PayrollReportService:
    """Wire the classification pipeline from settings (missing keys use defaults)."""
    strategy_factory = DayStrategyFactory(
        leave_precedence=LeavePrecedence(settings.get("LEAVE_PRECEDENCE", LeavePrecedence.ACTIVITY_FIRST.value)),
        minimal_activity_status=StatusCode.from_token(settings.get("MINIMAL_ACTIVITY_STATUS", StatusCode.PRESENT.value)),
    )
    return PayrollReportService(
        events_repo,
        leaves_repo,
        holidays_repo,
        users_repo,
        classifier=DailyStatusClassifier(
            strategy_factory=strategy_factory,
            calculator=StandardPayrollCalculator(),
        ),
        week_off_rule=week_off_rule_for(settings.get("WEEK_OFF_RULE", "lookback")),
        fetch_workers=int(settings.get("REPORT_FETCH_WORKERS", DEFAULT_FETCH_WORKERS)),
        tz=load_timezone(settings.get("TIMEZONE")),
        gate=LatestRequestGate(),
    )


def build_container(*, db_config: dict, settings: Optional[Mapping[str, Any]] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    users_repo = MySQLUserRepository(conn)
    events_repo = MySQLAttendanceEventRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    holidays_repo = MySQLHolidayRepository(conn)

    payroll_report_service = build_report_service(
        events_repo=events_repo,
        leaves_repo=leaves_repo,
        holidays_repo=holidays_repo,
        users_repo=users_repo,
        settings=settings or {},
    )

    return Container(
        users_repo=users_repo,
        events_repo=events_repo,
        leaves_repo=leaves_repo,
        holidays_repo=holidays_repo,
        payroll_report_service=payroll_report_service,
        conn=conn,
    )
