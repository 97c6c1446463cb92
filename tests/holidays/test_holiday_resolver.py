from datetime import date

from src.staff_attendance.staff_attendance.core.enums import UserCategory
from src.staff_attendance.staff_attendance.holidays.model import (
    ConfiguredHoliday,
    FixedHoliday,
    HolidayKind,
    PoolHoliday,
    RecurringHolidayRule,
)
from src.staff_attendance.staff_attendance.holidays.resolver import (
    HolidayCalendar,
    is_recurring_holiday,
    resolve_holiday,
    week_occurrence,
)

SECOND_SATURDAY = date(2025, 6, 14)


def test_week_occurrence_is_ceil_of_day_over_seven():
    assert week_occurrence(date(2025, 6, 1)) == 1
    assert week_occurrence(date(2025, 6, 7)) == 1
    assert week_occurrence(date(2025, 6, 8)) == 2
    assert week_occurrence(SECOND_SATURDAY) == 2
    assert week_occurrence(date(2025, 6, 29)) == 5


def test_fixed_holiday_matches_month_day_in_any_year():
    check = resolve_holiday(
        date(2026, 8, 15),
        user_id="u1",
        category=UserCategory.FIELD,
        fixed=[FixedHoliday(date="08-15", name="Independence Day")],
    )
    assert check.is_holiday is True
    assert check.kind == HolidayKind.FIXED


def test_recurring_rule_applies_by_category_and_site_follows_office():
    rules = [RecurringHolidayRule(day="Saturday", n=2, type=UserCategory.OFFICE)]

    assert is_recurring_holiday(SECOND_SATURDAY, UserCategory.OFFICE, rules) is True
    assert is_recurring_holiday(SECOND_SATURDAY, UserCategory.SITE, rules) is True
    assert is_recurring_holiday(SECOND_SATURDAY, UserCategory.FIELD, rules) is False
    assert is_recurring_holiday(date(2025, 6, 7), UserCategory.OFFICE, rules) is False


def test_recurring_rule_type_is_case_tolerant():
    rules = [RecurringHolidayRule(day="saturday", n=2, type="Field")]
    assert is_recurring_holiday(SECOND_SATURDAY, UserCategory.FIELD, rules) is True


def test_recurring_only_day_is_not_reported_as_company_holiday():
    check = resolve_holiday(
        SECOND_SATURDAY,
        user_id="u1",
        category=UserCategory.OFFICE,
        recurring=[RecurringHolidayRule(day="Saturday", n=2)],
    )
    assert check.is_holiday is False
    assert check.is_recurring is True
    assert check.kind == HolidayKind.RECURRING


def test_pool_holiday_compares_user_ids_case_insensitively():
    pool = [PoolHoliday(user_id=" EMP-7 ", holiday_date="-06-14")]

    assert resolve_holiday(SECOND_SATURDAY, user_id="emp-7", category=UserCategory.FIELD, pool=pool).is_holiday
    assert not resolve_holiday(SECOND_SATURDAY, user_id="emp-8", category=UserCategory.FIELD, pool=pool).is_holiday


def test_pool_entries_without_user_or_date_are_ignored():
    pool = [PoolHoliday(user_id="", holiday_date="2025-06-14"), PoolHoliday(user_id="u1", holiday_date="")]
    assert not resolve_holiday(SECOND_SATURDAY, user_id="u1", category=UserCategory.FIELD, pool=pool).is_holiday


def test_calendar_uses_configured_list_of_the_user_category():
    calendar = HolidayCalendar(
        configured={
            UserCategory.OFFICE: [ConfiguredHoliday(date="2025-06-10", name="Office offsite")],
            UserCategory.FIELD: [],
        }
    )
    office = calendar.check(date(2025, 6, 10), user_id="u1", category=UserCategory.OFFICE)
    field = calendar.check(date(2025, 6, 10), user_id="u2", category=UserCategory.FIELD)

    assert office.is_holiday and office.kind == HolidayKind.CONFIGURED
    assert not field.is_holiday


def test_calendar_for_user_keeps_only_that_users_pool():
    calendar = HolidayCalendar(
        pool=[
            PoolHoliday(user_id="u1", holiday_date="2025-06-10"),
            PoolHoliday(user_id="u2", holiday_date="2025-06-11"),
        ]
    )
    narrowed = calendar.for_user("U1")
    assert [h.user_id for h in narrowed.pool] == ["u1"]


def test_fixed_holiday_accepts_full_date_text():
    assert FixedHoliday(date="2025-01-26").month_day() == (1, 26)
    assert FixedHoliday(date="bad").month_day() is None
