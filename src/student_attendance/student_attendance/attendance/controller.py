from __future__ import annotations

import logging
from dataclasses import asdict, replace
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError, StateConflictError, ValidationError
from ..users.model import LoginUser
from .forms import AttendanceForm, DailyAttendanceEdit
from .model import AttendanceManagementRow

logger = logging.getLogger(__name__)


def _optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is invalid") from None


def _login_user_from_session() -> LoginUser:
    leave_date = session.get("leave_date")
    return LoginUser(
        lms_user_id=int(session["lms_user_id"]),
        user_name=session.get("user_name", ""),
        account_id=int(session.get("account_id") or 0),
        role=Role(session.get("role", Role.STUDENT.value)),
        course_id=_optional_int(session.get("course_id"), "course_id"),
        leave_date=parse_iso_date(leave_date) if leave_date else None,
    )


def _row_to_json(r: AttendanceManagementRow) -> dict:
    return {
        "attendance_id": r.attendance_id,
        "training_date": format_iso_date(r.training_date),
        "section_name": r.section_name,
        "is_today": r.is_today,
        "training_start_time": r.training_start_time,
        "training_end_time": r.training_end_time,
        "blank_time": r.blank_time,
        "blank_time_value": r.blank_time_value,
        "status": r.status.value if r.status else None,
        "status_disp_name": r.status_disp_name,
        "note": r.note,
    }


def _form_to_json(form: AttendanceForm) -> dict:
    data = asdict(form)
    data["attendance_list"] = [
        {
            **asdict(d),
            "training_date": format_iso_date(d.training_date),
            "status": d.status.value if d.status else None,
        }
        for d in form.attendance_list
    ]
    return data


def _bind_daily_edit(index: int, item: dict) -> DailyAttendanceEdit:
    prefix = f"attendance_list[{index}]"
    try:
        training_date = parse_iso_date(str(item.get("training_date") or ""))
    except ValueError:
        raise ValidationError(f"{prefix}.training_date is invalid") from None

    return DailyAttendanceEdit(
        training_date=training_date,
        training_start_hour=_optional_int(item.get("training_start_hour"), f"{prefix}.training_start_hour"),
        training_start_minute=_optional_int(item.get("training_start_minute"), f"{prefix}.training_start_minute"),
        training_end_hour=_optional_int(item.get("training_end_hour"), f"{prefix}.training_end_hour"),
        training_end_minute=_optional_int(item.get("training_end_minute"), f"{prefix}.training_end_minute"),
        blank_time=_optional_int(item.get("blank_time"), f"{prefix}.blank_time"),
        note=str(item.get("note") or ""),
        status_disp_name=str(item.get("status_disp_name") or ""),
    )


def _bind_form(data: dict, user: LoginUser) -> AttendanceForm:
    items = data.get("attendance_list") or []
    return AttendanceForm(
        lms_user_id=_optional_int(data.get("lms_user_id"), "lms_user_id") or user.lms_user_id,
        course_id=_optional_int(data.get("course_id"), "course_id"),
        attendance_list=tuple(_bind_daily_edit(i, item) for i, item in enumerate(items)),
    )


def _error_response(e: DomainError):
    if isinstance(e, ValidationError):
        issues = [{"field": i.field, "message": i.message} for i in e.issues]
        return jsonify({"success": False, "message": str(e), "errors": issues}), 400
    if isinstance(e, AuthorizationError):
        return jsonify({"success": False, "message": str(e)}), 403
    if isinstance(e, StateConflictError):
        return jsonify({"success": False, "message": str(e)}), 409
    return jsonify({"success": False, "message": str(e)}), 400


def register(app: Flask, container) -> None:
    service = container.attendance_service

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "lms_user_id" not in session:
                return jsonify({"success": False, "message": "Please log in to continue."}), 401
            return view(*args, **kwargs)

        return wrapper

    def _target(user: LoginUser) -> tuple[Optional[int], int]:
        """(course_id, lms_user_id) to show; staff may look at another student."""
        if user.is_student:
            return user.course_id, user.lms_user_id
        course_id = _optional_int(request.args.get("course_id"), "course_id")
        lms_user_id = _optional_int(request.args.get("lms_user_id"), "lms_user_id")
        return (course_id if course_id is not None else user.course_id), (lms_user_id or user.lms_user_id)

    @app.route("/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def attendance_list():
        try:
            user = _login_user_from_session()
            course_id, lms_user_id = _target(user)
            rows = service.get_attendance_management(course_id, lms_user_id)
            return jsonify(
                {
                    "success": True,
                    "rows": [_row_to_json(r) for r in rows],
                    "has_unfilled_days": service.has_unfilled_days(user) if user.is_student else False,
                }
            )
        except DomainError as e:
            return _error_response(e)
        except Exception:
            logger.exception("Failed to load attendance list")
            return jsonify({"success": False, "message": "System error while loading attendance"}), 500

    @app.route("/attendance/punch-in", methods=["POST"], endpoint="attendance_punch_in")
    @login_required
    def punch_in():
        try:
            message = service.punch_in(_login_user_from_session())
            return jsonify({"success": True, "message": message})
        except DomainError as e:
            return _error_response(e)
        except Exception:
            logger.exception("Punch-in failed")
            return jsonify({"success": False, "message": "System error while recording punch-in"}), 500

    @app.route("/attendance/punch-out", methods=["POST"], endpoint="attendance_punch_out")
    @login_required
    def punch_out():
        try:
            message = service.punch_out(_login_user_from_session())
            return jsonify({"success": True, "message": message})
        except DomainError as e:
            return _error_response(e)
        except Exception:
            logger.exception("Punch-out failed")
            return jsonify({"success": False, "message": "System error while recording punch-out"}), 500

    @app.route("/attendance/form", methods=["GET"], endpoint="attendance_form")
    @login_required
    def attendance_form():
        try:
            user = _login_user_from_session()
            course_id, lms_user_id = _target(user)
            rows = service.get_attendance_management(course_id, lms_user_id)
            form = service.set_attendance_form(user, rows)
            if not user.is_student:
                form = replace(form, lms_user_id=lms_user_id, course_id=course_id)
            return jsonify({"success": True, "form": _form_to_json(form)})
        except DomainError as e:
            return _error_response(e)
        except Exception:
            logger.exception("Failed to build attendance form")
            return jsonify({"success": False, "message": "System error while loading attendance"}), 500

    @app.route("/attendance/update", methods=["POST"], endpoint="attendance_update")
    @login_required
    def attendance_update():
        try:
            user = _login_user_from_session()
            form = _bind_form(request.get_json(silent=True) or {}, user)
            message = service.update(user, form)
            return jsonify({"success": True, "message": message})
        except DomainError as e:
            return _error_response(e)
        except Exception:
            logger.exception("Attendance update failed")
            return jsonify({"success": False, "message": "System error while updating attendance"}), 500
