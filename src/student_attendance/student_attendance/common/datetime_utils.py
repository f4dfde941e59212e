from __future__ import annotations

from datetime import date, datetime
from typing import Protocol


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def format_display_date(value: date, *, with_weekday: bool = False) -> str:
    """Human readable date, e.g. ``Apr 1, 2024 (Mon)``."""
    text = f"{value.strftime('%b')} {value.day}, {value.year}"
    if with_weekday:
        text += f" ({value.strftime('%a')})"
    return text


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError

    def training_date(self, course_id: int | None) -> date:
        """Date the course is currently training on."""

        raise NotImplementedError


class SystemClock:
    """Wall-clock implementation: the training date is today's local date."""

    def now(self) -> datetime:
        return now_local()

    def training_date(self, course_id: int | None) -> date:
        return self.now().date()


class FixedClock:
    """Clock frozen at one instant (tests, replays)."""

    def __init__(self, at: datetime):
        self._at = at

    def now(self) -> datetime:
        return self._at

    def training_date(self, course_id: int | None) -> date:
        return self._at.date()
