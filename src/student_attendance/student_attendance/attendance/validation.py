from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..common import messages
from ..common.messages import MessageResolver
from ..common.training_time import TrainingTime
from ..common.validators import exceeds_max_length, is_partial_pair
from ..core.constants import EMPTY_TIME, NOTE_MAX_LENGTH
from ..core.exceptions import ParseError
from .forms import DailyAttendanceEdit


@dataclass(frozen=True)
class ValidationIssue:
    """A problem found in the submitted form.

    ``field`` names the offending input for field-level issues and is
    ``None`` for form-level ones.
    """

    message: str
    field: Optional[str] = None

    @property
    def is_field_level(self) -> bool:
        return self.field is not None


@dataclass
class ValidationResult:
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    @property
    def field_issues(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.is_field_level]

    @property
    def form_issues(self) -> list[ValidationIssue]:
        return [i for i in self.issues if not i.is_field_level]

    def add_field(self, field_name: str, message: str) -> None:
        self.issues.append(ValidationIssue(message=message, field=field_name))

    def add_form(self, message: str) -> None:
        self.issues.append(ValidationIssue(message=message))


def _pair_is_valid(hour: Optional[int], minute: Optional[int]) -> bool:
    if is_partial_pair(hour, minute):
        return False
    try:
        TrainingTime.from_parts(hour, minute)
    except ParseError:
        return False
    return True


def validate_daily_edits(edits: Sequence[DailyAttendanceEdit], resolver: MessageResolver) -> ValidationResult:
    """Check every submitted day and collect all problems without stopping early."""
    result = ValidationResult()

    for index, edit in enumerate(edits):
        if exceeds_max_length(edit.note, NOTE_MAX_LENGTH):
            result.add_field(
                f"attendance_list[{index}].note",
                resolver.get_message(messages.MAX_LENGTH, "Note", NOTE_MAX_LENGTH),
            )

        start_ok = _pair_is_valid(edit.training_start_hour, edit.training_start_minute)
        if not start_ok:
            result.add_form(resolver.get_message(messages.INPUT_INVALID, "Start time"))

        end_ok = _pair_is_valid(edit.training_end_hour, edit.training_end_minute)
        if not end_ok:
            result.add_form(resolver.get_message(messages.INPUT_INVALID, "End time"))

        if edit.start_time_text == EMPTY_TIME and edit.end_time_text != EMPTY_TIME:
            result.add_form(resolver.get_message(messages.PUNCH_IN_EMPTY))
        elif start_ok and end_ok:
            start, end = edit.start, edit.end
            if start is not None and end is not None and end < start:
                result.add_form(resolver.get_message(messages.TRAINING_TIME_RANGE))

    return result
