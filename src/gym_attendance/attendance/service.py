from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import date_key, end_of_day, now_utc, start_of_day, truncate_to_millis
from ..common.ids import generate_attendance_id
from ..common.validators import require_date_range
from ..core.enums import AttendanceType
from ..core.exceptions import (
    AlreadyInsideError,
    NoAvailableAttendancesError,
    NotInsideError,
    UserNotFoundError,
)
from ..users.repository import UserRepository
from .model import ActiveAttendanceRow, AttendanceRecord, AttendanceStatusView
from .quota import QuotaCalculator
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Check-in/check-out theo hội viên.

    A user is either Outside (no active record) or Inside (exactly one active
    record). The ledger enforces the one-active-record rule itself, so two
    racing check-ins cannot both succeed even if both pass the state check here.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        quota: QuotaCalculator,
        *,
        id_factory: Callable[[], str] = generate_attendance_id,
    ):
        self._attendance = attendance
        self._users = users
        self._quota = quota
        self._id_factory = id_factory

    def _require_user(self, user_id: str) -> None:
        if not self._users.get_by_id(user_id):
            raise UserNotFoundError()

    def check_in(self, user_id: str, attendance_type: AttendanceType, *, now: datetime | None = None) -> AttendanceRecord:
        now = truncate_to_millis(now or now_utc())

        self._require_user(user_id)

        if self.is_user_currently_inside(user_id):
            raise AlreadyInsideError()

        if not self.validate_user_can_enter(user_id, attendance_type, now=now):
            raise NoAvailableAttendancesError()

        record = self._attendance.create_checkin(
            attendance_id=self._id_factory(),
            user_id=user_id,
            entrance_time=now,
            attendance_type=attendance_type,
            date_key=date_key(now),
        )
        logger.info("User %s checked in (%s) as %s", user_id, attendance_type.value, record.attendance_id)
        return record

    def check_out(self, user_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = truncate_to_millis(now or now_utc())

        self._require_user(user_id)

        active = self._attendance.get_active_for_user(user_id)
        if not active:
            raise NotInsideError()

        exit_time = max(now, active.entrance_time)
        # False means a concurrent check-out closed it first.
        if not self._attendance.update_checkout(attendance_id=active.attendance_id, exit_time=exit_time):
            raise NotInsideError()

        closed = self._attendance.get_by_id(active.attendance_id)
        logger.info("User %s checked out of %s", user_id, active.attendance_id)
        return closed or AttendanceRecord(
            attendance_id=active.attendance_id,
            user_id=active.user_id,
            entrance_time=active.entrance_time,
            exit_time=exit_time,
            type=active.type,
            date_key=active.date_key,
            is_active=False,
        )

    def get_status(self, user_id: str, *, now: datetime | None = None) -> AttendanceStatusView:
        self._require_user(user_id)

        current = self._attendance.get_active_for_user(user_id)
        available = self._quota.available_attendances(user_id, now=now)
        return AttendanceStatusView(is_inside=current is not None, current_attendance=current, available=available)

    def history(
        self,
        user_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        attendance_type: Optional[AttendanceType] = None,
    ) -> list[AttendanceRecord]:
        self._require_user(user_id)
        require_date_range(start, end)

        rows = self._attendance.list_for_user(
            user_id=user_id,
            start=start_of_day(start) if start else None,
            end=end_of_day(end) if end else None,
            attendance_type=attendance_type,
        )
        return list(rows)

    def list_active(self) -> list[ActiveAttendanceRow]:
        return list(self._attendance.list_active_with_users())

    def is_user_currently_inside(self, user_id: str) -> bool:
        return self._attendance.get_active_for_user(user_id) is not None

    def validate_user_can_enter(
        self, user_id: str, attendance_type: AttendanceType, *, now: datetime | None = None
    ) -> bool:
        return self._quota.has_available_attendances(user_id, attendance_type, now=now) > 0
