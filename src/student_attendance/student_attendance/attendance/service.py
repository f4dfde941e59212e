from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..common import messages
from ..common.datetime_utils import Clock, SystemClock, format_display_date, format_iso_date
from ..common.messages import DictMessageResolver, MessageResolver
from ..common.training_time import TrainingTime, hour_of, minute_of
from ..core.constants import EMPTY_TIME
from ..core.enums import PunchType
from ..core.exceptions import AuthorizationError, DuplicateAttendanceError, StateConflictError, ValidationError
from ..courses.repository import CourseCalendar
from ..users.model import LoginUser
from .blank_time import blank_time_options, calc_blank_time
from .factory import AttendanceStrategyFactory, classify_status
from .forms import AttendanceForm, DailyAttendanceEdit, hour_options, minute_options
from .model import AttendanceManagementRow, AttendanceRecord, StoredAttendance
from .reconciler import reconcile_daily_edits
from .repository import AttendanceRepository
from .validation import ValidationResult, validate_daily_edits

logger = logging.getLogger(__name__)


class StudentAttendanceService:
    """Use cases of the student attendance screen: punch, list, bulk edit."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        courses: CourseCalendar,
        *,
        clock: Optional[Clock] = None,
        resolver: Optional[MessageResolver] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
    ):
        self._attendance = attendance
        self._courses = courses
        self._clock = clock or SystemClock()
        self._messages = resolver or DictMessageResolver()
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def get_attendance_management(self, course_id: Optional[int], lms_user_id: int) -> list[AttendanceManagementRow]:
        today = self._clock.training_date(course_id)
        rows = self._attendance.get_attendance_management(course_id=course_id, lms_user_id=lms_user_id, today=today)
        return [
            replace(
                r,
                blank_time_value=calc_blank_time(r.blank_time),
                status_disp_name=r.status.label if r.status else None,
            )
            for r in rows
        ]

    # ----- punch in / punch out -------------------------------------------------

    def _reject(self, error_cls, key: str, user: LoginUser, punch_type: PunchType):
        message = self._messages.get_message(key)
        logger.warning("Punch %s rejected for user %s: %s", punch_type.value, user.lms_user_id, key)
        return error_cls(message)

    def _check_punch(
        self, user: LoginUser, punch_type: PunchType, current: TrainingTime
    ) -> tuple[Optional[StoredAttendance], date]:
        """Return the day's row (if any) and the training date it was looked up for."""
        if not user.is_student:
            raise self._reject(AuthorizationError, messages.AUTHORIZATION, user, punch_type)

        training_date = self._clock.training_date(user.course_id)
        if not self._courses.is_work_day(user.course_id, training_date):
            raise self._reject(StateConflictError, messages.NOT_WORK_DAY, user, punch_type)

        row = self._attendance.find_by_user_and_date(user.lms_user_id, training_date)

        if punch_type == PunchType.AT_WORK:
            if row is not None and row.record.training_start_time != EMPTY_TIME:
                raise self._reject(StateConflictError, messages.PUNCH_ALREADY_EXISTS, user, punch_type)
            return row, training_date

        if row is None or row.record.training_start_time == EMPTY_TIME:
            raise self._reject(StateConflictError, messages.PUNCH_IN_EMPTY, user, punch_type)
        if row.record.training_end_time != EMPTY_TIME:
            raise self._reject(StateConflictError, messages.PUNCH_ALREADY_EXISTS, user, punch_type)

        start = TrainingTime.parse(row.record.training_start_time)
        if start > current:
            raise self._reject(StateConflictError, messages.TRAINING_TIME_RANGE, user, punch_type)
        return row, training_date

    def punch_check(self, user: LoginUser, punch_type: PunchType) -> None:
        """Raise if the punch cannot be recorded right now; nothing is written."""
        self._check_punch(user, punch_type, TrainingTime.now(self._clock))

    def punch_in(self, user: LoginUser) -> str:
        start = TrainingTime.now(self._clock)
        now = self._clock.now()
        row, training_date = self._check_punch(user, PunchType.AT_WORK, start)

        hours = self._courses.get_course_hours(user.course_id)
        status = classify_status(start, None, hours, factory=self._factory)

        if row is None:
            record = AttendanceRecord(
                lms_user_id=user.lms_user_id,
                account_id=user.account_id,
                training_date=training_date,
                training_start_time=start.formatted(),
                training_end_time=EMPTY_TIME,
                status=status,
                note="",
                blank_time=None,
                delete_flg=False,
                first_create_user=user.lms_user_id,
                first_create_date=now,
                last_modified_user=user.lms_user_id,
                last_modified_date=now,
            )
            try:
                attendance_id = self._attendance.insert(record)
            except DuplicateAttendanceError:
                # Another request created the day's row after our lookup.
                raise self._reject(StateConflictError, messages.PUNCH_ALREADY_EXISTS, user, PunchType.AT_WORK) from None
            logger.info("Punch-in recorded for user %s on %s (id=%s)", user.lms_user_id, training_date, attendance_id)
        else:
            record = row.record.with_changes(
                training_start_time=start.formatted(),
                status=status,
                delete_flg=False,
                last_modified_user=user.lms_user_id,
                last_modified_date=now,
            )
            self._attendance.update(row.with_record(record))
            logger.info("Punch-in recorded for user %s on %s (id=%s)", user.lms_user_id, training_date, row.attendance_id)

        return self._messages.get_message(messages.UPDATE_NOTICE)

    def punch_out(self, user: LoginUser) -> str:
        end = TrainingTime.now(self._clock)
        now = self._clock.now()
        row, _ = self._check_punch(user, PunchType.LEAVING, end)

        start = TrainingTime.parse(row.record.training_start_time)
        hours = self._courses.get_course_hours(user.course_id)
        status = classify_status(start, end, hours, factory=self._factory)

        record = row.record.with_changes(
            training_end_time=end.formatted(),
            status=status,
            delete_flg=False,
            last_modified_user=user.lms_user_id,
            last_modified_date=now,
        )
        self._attendance.update(row.with_record(record))
        logger.info("Punch-out recorded for user %s on %s", user.lms_user_id, row.training_date)
        return self._messages.get_message(messages.UPDATE_NOTICE)

    # ----- bulk edit ------------------------------------------------------------

    def set_attendance_form(self, user: LoginUser, rows: Sequence[AttendanceManagementRow]) -> AttendanceForm:
        """Turn list rows into the editable form (times split into hour/minute)."""
        attendance_list = tuple(
            DailyAttendanceEdit(
                training_date=r.training_date,
                training_start_hour=hour_of(r.training_start_time),
                training_start_minute=minute_of(r.training_start_time),
                training_end_hour=hour_of(r.training_end_time),
                training_end_minute=minute_of(r.training_end_time),
                blank_time=r.blank_time,
                note=r.note or "",
                status_disp_name=r.status_disp_name or (r.status.label if r.status else ""),
                attendance_id=r.attendance_id,
                status=r.status,
                section_name=r.section_name,
                is_today=r.is_today,
                disp_training_date=format_display_date(r.training_date, with_weekday=True),
                blank_time_value=calc_blank_time(r.blank_time),
            )
            for r in rows
        )

        return AttendanceForm(
            lms_user_id=user.lms_user_id,
            course_id=user.course_id,
            user_name=user.user_name,
            leave_flg=user.has_left,
            leave_date=format_iso_date(user.leave_date) if user.leave_date else None,
            disp_leave_date=format_display_date(user.leave_date) if user.leave_date else None,
            blank_times=blank_time_options(),
            training_hours=hour_options(),
            training_minutes=minute_options(),
            attendance_list=attendance_list,
        )

    def update_check(self, form: AttendanceForm) -> ValidationResult:
        return validate_daily_edits(form.attendance_list, self._messages)

    def update(self, user: LoginUser, form: AttendanceForm) -> str:
        result = self.update_check(form)
        if not result.ok:
            logger.warning("Attendance update rejected for user %s: %d issue(s)", form.lms_user_id, len(result.issues))
            raise ValidationError(self._messages.get_message(messages.VALIDATION_FAILED), result.issues)

        # Students may only edit their own rows against their own course hours;
        # staff edit the user and course named in the form.
        if user.is_student:
            lms_user_id, course_id = user.lms_user_id, user.course_id
        else:
            lms_user_id = form.lms_user_id
            course_id = form.course_id if form.course_id is not None else user.course_id
        now = self._clock.now()

        reconciled = reconcile_daily_edits(
            lms_user_id=lms_user_id,
            edits=form.attendance_list,
            existing=self._attendance.find_all_by_user(lms_user_id),
            hours=self._courses.get_course_hours(course_id),
            actor_id=user.lms_user_id,
            account_id=user.account_id,
            now=now,
            factory=self._factory,
        )

        self._attendance.save_all(
            inserts=[row.record for row in reconciled.inserts],
            updates=reconciled.updates,
        )

        logger.info(
            "Attendance updated for user %s by %s: %d inserted, %d updated",
            lms_user_id,
            user.lms_user_id,
            len(reconciled.inserts),
            len(reconciled.updates),
        )
        return self._messages.get_message(messages.UPDATE_NOTICE)

    def has_unfilled_days(self, user: LoginUser) -> bool:
        training_date = self._clock.training_date(user.course_id)
        return self._attendance.count_unfilled(user.lms_user_id, training_date) > 0
