from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
from typing import Optional

from ..core.constants import EMPTY_TIME
from ..core.exceptions import ParseError
from .datetime_utils import Clock, now_local


@total_ordering
@dataclass(frozen=True)
class TrainingTime:
    """Hour:minute clock value used for punch times.

    Stored as ``HH:mm``; an empty string means "not entered" and is never
    turned into a TrainingTime (see ``parse_optional``).
    """

    hour: int
    minute: int

    def __post_init__(self):
        if not 0 <= self.hour <= 23 or not 0 <= self.minute <= 59:
            raise ParseError(f"Time out of range: {self.hour}:{self.minute}")

    @classmethod
    def now(cls, clock: Optional[Clock] = None) -> "TrainingTime":
        current = clock.now() if clock else now_local()
        return cls(current.hour, current.minute)

    @classmethod
    def parse(cls, text: str) -> "TrainingTime":
        parts = (text or "").strip().split(":")
        if len(parts) != 2:
            raise ParseError(f"Invalid training time: {text!r}")
        try:
            hour, minute = int(parts[0]), int(parts[1])
        except ValueError:
            raise ParseError(f"Invalid training time: {text!r}") from None
        return cls(hour, minute)

    @classmethod
    def parse_optional(cls, text: Optional[str]) -> Optional["TrainingTime"]:
        if not text or not text.strip():
            return None
        return cls.parse(text)

    @classmethod
    def from_parts(cls, hour: Optional[int], minute: Optional[int]) -> Optional["TrainingTime"]:
        """Build from a submitted hour/minute pair; a partial pair counts as empty."""
        if hour is None or minute is None:
            return None
        return cls(int(hour), int(minute))

    @property
    def total_minutes(self) -> int:
        return self.hour * 60 + self.minute

    def compare_to(self, other: "TrainingTime") -> int:
        return self.total_minutes - other.total_minutes

    def __lt__(self, other: "TrainingTime") -> bool:
        if not isinstance(other, TrainingTime):
            return NotImplemented
        return self.compare_to(other) < 0

    def formatted(self) -> str:
        """Zero padded ``HH:mm`` used for storage."""
        return f"{self.hour:02d}:{self.minute:02d}"

    def __str__(self) -> str:
        return f"{self.hour}:{self.minute}"


def format_optional(value: Optional[TrainingTime]) -> str:
    return value.formatted() if value else EMPTY_TIME


def hour_of(text: Optional[str]) -> Optional[int]:
    value = TrainingTime.parse_optional(text)
    return value.hour if value else None


def minute_of(text: Optional[str]) -> Optional[int]:
    value = TrainingTime.parse_optional(text)
    return value.minute if value else None
