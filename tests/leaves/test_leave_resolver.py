from datetime import date

import pytest

from src.staff_attendance.staff_attendance.core.enums import LeaveStatus, LeaveType, StatusCode
from src.staff_attendance.staff_attendance.leaves.model import LeaveInterval
from src.staff_attendance.staff_attendance.leaves.resolver import find_approved_leave


def _leave(**overrides):
    data = dict(
        user_id="u1",
        start_date=date(2025, 6, 4),
        end_date=date(2025, 6, 6),
        leave_type="Sick Leave",
        status=LeaveStatus.APPROVED,
    )
    data.update(overrides)
    return LeaveInterval(**data)


def test_interval_is_inclusive_on_both_ends():
    leaves = [_leave()]
    assert find_approved_leave(date(2025, 6, 4), "u1", leaves) is not None
    assert find_approved_leave(date(2025, 6, 6), "u1", leaves) is not None
    assert find_approved_leave(date(2025, 6, 7), "u1", leaves) is None


def test_pending_and_other_users_leaves_are_ignored():
    leaves = [_leave(status=LeaveStatus.PENDING), _leave(user_id="u2")]
    assert find_approved_leave(date(2025, 6, 5), "u1", leaves) is None


def test_status_may_come_as_plain_text():
    assert _leave(status="Approved").is_approved
    assert not _leave(status="rejected").is_approved


@pytest.mark.parametrize(
    "label, kind, status",
    [
        ("Sick", LeaveType.SICK, StatusCode.SICK_LEAVE),
        ("sick leave", LeaveType.SICK, StatusCode.SICK_LEAVE),
        ("Comp-Off", LeaveType.COMP_OFF, StatusCode.COMP_OFF),
        ("Floating Holiday", LeaveType.FLOATING, StatusCode.FLOATING_HOLIDAY),
        ("Loss of Pay", LeaveType.LOSS_OF_PAY, StatusCode.ABSENT),
        ("LOP", LeaveType.LOSS_OF_PAY, StatusCode.ABSENT),
        ("Casual", LeaveType.EARNED, StatusCode.EARNED_LEAVE),
        (None, LeaveType.EARNED, StatusCode.EARNED_LEAVE),
    ],
)
def test_leave_labels_fold_into_canonical_types(label, kind, status):
    assert LeaveType.from_label(label) == kind
    assert kind.status == status
