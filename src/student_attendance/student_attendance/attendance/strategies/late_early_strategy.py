from __future__ import annotations

from typing import Optional

from ...common.training_time import TrainingTime
from ...core.enums import AttendanceStatus
from ...courses.model import CourseHours
from .base import AttendanceStrategy, StatusDecision


class LateEarlyLeaveStrategy(AttendanceStrategy):
    """Both late and left early."""

    def decide(
        self,
        *,
        start: Optional[TrainingTime],
        end: Optional[TrainingTime],
        hours: CourseHours,
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE_AND_EARLY_LEAVE)
