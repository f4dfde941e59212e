from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.training_time import TrainingTime
from ..core.enums import AttendanceStatus
from ..core.exceptions import StateConflictError
from ..courses.model import CourseHours
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.late_early_strategy import LateEarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_times(
        self,
        *,
        start: Optional[TrainingTime],
        end: Optional[TrainingTime],
        hours: CourseHours,
    ) -> AttendanceStrategy:
        if start is None and end is None:
            return AbsentStrategy()
        if start is None:
            # Punch-out without punch-in; validation rejects this before we get here.
            raise StateConflictError("Punch-in is missing for this day")

        late = start > hours.training_start
        early_leave = end is not None and end < hours.training_end

        if late and early_leave:
            return LateEarlyLeaveStrategy()
        if late:
            return LateStrategy()
        if early_leave:
            return EarlyLeaveStrategy()
        return NormalStrategy()


def classify_status(
    start: Optional[TrainingTime],
    end: Optional[TrainingTime],
    hours: CourseHours,
    *,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> AttendanceStatus:
    """Derive the status code of a day from its start/end times."""
    factory = factory or AttendanceStrategyFactory()
    strategy = factory.for_times(start=start, end=end, hours=hours)
    return strategy.decide(start=start, end=end, hours=hours).status
