from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...common.training_time import TrainingTime
from ...core.enums import AttendanceStatus
from ...courses.model import CourseHours


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide(
        self,
        *,
        start: Optional[TrainingTime],
        end: Optional[TrainingTime],
        hours: CourseHours,
    ) -> StatusDecision:
        raise NotImplementedError
