from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import OFFICE_ROLES
from ..core.enums import UserCategory


def category_for_role(role: Optional[str]) -> UserCategory:
    if (role or "").strip().lower() in OFFICE_ROLES:
        return UserCategory.OFFICE
    return UserCategory.FIELD


@dataclass(frozen=True)
class StaffMember:
    """Thực thể miền (domain): Nhân viên.

    Lưu ý: ``category`` chỉ cần khi nhân viên thuộc nhóm site; mặc định suy ra từ role.
    """

    user_id: str
    name: str
    role: str
    category: Optional[UserCategory] = None

    @property
    def staff_category(self) -> UserCategory:
        return self.category or category_for_role(self.role)
