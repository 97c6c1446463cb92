from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import StaffMember


class UserRepository(Protocol):
    """Giao diện repository cho nhân viên.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    """

    def get_by_id(self, user_id: str) -> Optional[StaffMember]:
        raise NotImplementedError

    def list_staff(self) -> Sequence[StaffMember]:
        raise NotImplementedError
