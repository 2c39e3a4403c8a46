from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import AttendanceType
from ..core.exceptions import InvalidDateRangeError, ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} không hợp lệ")
    return str(value).strip()


def require_attendance_type(value: Optional[str]) -> AttendanceType:
    try:
        return AttendanceType(str(value or "").strip())
    except ValueError:
        raise ValidationError('type phải là "gym" hoặc "class"') from None


def optional_attendance_type(value: Optional[str]) -> Optional[AttendanceType]:
    if value is None or not str(value).strip():
        return None
    return require_attendance_type(value)


def optional_iso_date(value: Optional[str], field_name: str) -> Optional[date]:
    if value is None or not str(value).strip():
        return None
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        raise InvalidDateRangeError(f"{field_name} phải có định dạng YYYY-MM-DD") from None


def require_date_range(start: Optional[date], end: Optional[date]) -> None:
    if start and end and start > end:
        raise InvalidDateRangeError("Ngày bắt đầu phải trước hoặc bằng ngày kết thúc")
