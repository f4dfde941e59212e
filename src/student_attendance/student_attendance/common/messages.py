from __future__ import annotations

from typing import Mapping, Optional, Protocol

AUTHORIZATION = "attendance.authorization"
NOT_WORK_DAY = "attendance.not_work_day"
PUNCH_ALREADY_EXISTS = "attendance.punch_already_exists"
PUNCH_IN_EMPTY = "attendance.punch_in_empty"
TRAINING_TIME_RANGE = "attendance.training_time_range"
UPDATE_NOTICE = "attendance.update_notice"
VALIDATION_FAILED = "attendance.validation_failed"
MAX_LENGTH = "input.max_length"
INPUT_INVALID = "input.invalid"

DEFAULT_MESSAGES: dict[str, str] = {
    AUTHORIZATION: "You are not allowed to record attendance.",
    NOT_WORK_DAY: "Today is not a training day.",
    PUNCH_ALREADY_EXISTS: "Today's attendance is already recorded. Please edit it directly.",
    PUNCH_IN_EMPTY: "Punch-in is missing, so the punch-out cannot be recorded.",
    TRAINING_TIME_RANGE: "The end time must be later than the start time.",
    UPDATE_NOTICE: "Attendance information has been updated.",
    VALIDATION_FAILED: "Attendance input has errors.",
    MAX_LENGTH: "{0} must be at most {1} characters.",
    INPUT_INVALID: "{0} is invalid.",
}


class MessageResolver(Protocol):
    def get_message(self, key: str, *args: object) -> str:
        raise NotImplementedError


class DictMessageResolver(MessageResolver):
    """Looks messages up in a plain dict; unknown keys resolve to the key itself."""

    def __init__(self, messages: Optional[Mapping[str, str]] = None):
        self._messages = dict(DEFAULT_MESSAGES)
        if messages:
            self._messages.update(messages)

    def get_message(self, key: str, *args: object) -> str:
        template = self._messages.get(key, key)
        return template.format(*args) if args else template
