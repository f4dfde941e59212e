from __future__ import annotations

from typing import Optional

from ..core.constants import BLANK_TIME_MAX_MINUTES, BLANK_TIME_STEP_MINUTES


def calc_blank_time(minutes: Optional[int]) -> Optional[str]:
    """Display form of a stored break duration, e.g. 90 -> ``1h 30m``.

    ``None`` stays ``None`` (no break entered is not the same as zero).
    """
    if minutes is None:
        return None
    hours, rest = divmod(int(minutes), 60)
    if hours and rest:
        return f"{hours}h {rest}m"
    if hours:
        return f"{hours}h"
    return f"{rest}m"


def blank_time_options() -> dict[int, str]:
    """Selectable break durations for the edit form, in minutes -> display."""
    return {
        minutes: calc_blank_time(minutes)
        for minutes in range(BLANK_TIME_STEP_MINUTES, BLANK_TIME_MAX_MINUTES + 1, BLANK_TIME_STEP_MINUTES)
    }
