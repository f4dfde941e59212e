from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class LoginUser:
    """The acting account for one request (what the session knows about the user)."""

    lms_user_id: int
    user_name: str
    account_id: int
    role: Role
    course_id: Optional[int] = None
    leave_date: Optional[date] = None

    @property
    def is_student(self) -> bool:
        return self.role == Role.STUDENT

    @property
    def has_left(self) -> bool:
        return self.leave_date is not None
