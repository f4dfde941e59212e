from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.training_time import TrainingTime


@dataclass(frozen=True)
class CourseHours:
    """Scheduled training hours of a course (work-day start/end boundaries)."""

    course_id: Optional[int]
    training_start: TrainingTime
    training_end: TrainingTime
