from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.training_time import format_optional
from ..core.constants import EMPTY_TIME
from ..core.enums import AttendanceStatus
from ..courses.model import CourseHours
from .factory import AttendanceStrategyFactory, classify_status
from .forms import DailyAttendanceEdit
from .model import AttendanceRecord, AttendanceRow, NewAttendance, StoredAttendance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileResult:
    """All of a user's rows after merging, ordered by training date."""

    rows: tuple[AttendanceRow, ...]
    touched_dates: frozenset[date]

    @property
    def inserts(self) -> list[NewAttendance]:
        return [r for r in self.rows if isinstance(r, NewAttendance)]

    @property
    def updates(self) -> list[StoredAttendance]:
        return [r for r in self.rows if isinstance(r, StoredAttendance) and r.training_date in self.touched_dates]


def _blank_record(lms_user_id: int, training_date: date, *, actor_id: int, now: datetime) -> AttendanceRecord:
    return AttendanceRecord(
        lms_user_id=lms_user_id,
        training_date=training_date,
        training_start_time=EMPTY_TIME,
        training_end_time=EMPTY_TIME,
        status=AttendanceStatus.ABSENT,
        first_create_user=actor_id,
        first_create_date=now,
    )


def reconcile_daily_edits(
    *,
    lms_user_id: int,
    edits: Sequence[DailyAttendanceEdit],
    existing: Sequence[StoredAttendance],
    hours: CourseHours,
    actor_id: int,
    account_id: Optional[int],
    now: datetime,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> ReconcileResult:
    """Merge submitted days into the user's persisted rows.

    Rows are matched by training date, never by id: a matched row keeps its
    id and creation audit, an unmatched day becomes a ``NewAttendance``.
    Input is expected to have passed ``validate_daily_edits``.
    """
    by_date: dict[date, AttendanceRow] = {row.training_date: row for row in existing}
    touched: set[date] = set()

    for edit in edits:
        # A half-entered pair is treated as empty.
        start, end = edit.start, edit.end

        current = by_date.get(edit.training_date)
        base = (
            current.record
            if current is not None
            else _blank_record(lms_user_id, edit.training_date, actor_id=actor_id, now=now)
        )

        if start is None and end is None and edit.status_disp_name == AttendanceStatus.ABSENT.label:
            status = AttendanceStatus.ABSENT
        else:
            status = classify_status(start, end, hours, factory=factory)

        record = base.with_changes(
            lms_user_id=lms_user_id,
            account_id=account_id,
            training_start_time=format_optional(start),
            training_end_time=format_optional(end),
            blank_time=edit.blank_time,
            status=status,
            note=edit.note or "",
            delete_flg=False,
            last_modified_user=actor_id,
            last_modified_date=now,
        )

        if isinstance(current, StoredAttendance):
            by_date[edit.training_date] = current.with_record(record)
        else:
            by_date[edit.training_date] = NewAttendance(record=record)
        touched.add(edit.training_date)

    rows = tuple(by_date[d] for d in sorted(by_date))
    logger.debug("Reconciled %d edits for user %s (%d rows total)", len(edits), lms_user_id, len(rows))
    return ReconcileResult(rows=rows, touched_dates=frozenset(touched))
