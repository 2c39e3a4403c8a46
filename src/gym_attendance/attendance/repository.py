from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import AttendanceType
from .model import ActiveAttendanceRow, AttendanceRecord


class AttendanceRepository(Protocol):
    """Giao diện sổ ghi lượt vào (Attendance Ledger).

    ``create_checkin`` must be atomic with respect to the one-active-record
    rule: if the user already has an active record it raises
    ``AlreadyInsideError`` and writes nothing.
    """

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_active_for_user(self, user_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        attendance_id: str,
        user_id: str,
        entrance_time: datetime,
        attendance_type: AttendanceType,
        date_key: str,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def update_checkout(self, *, attendance_id: str, exit_time: datetime) -> bool:
        """Close an active record. Returns False when it was not active anymore."""

        raise NotImplementedError

    def count_by_type_between(self, *, user_id: str, start: datetime, end: datetime) -> Mapping[AttendanceType, int]:
        """Count records with ``start <= entrance_time < end`` grouped by type."""

        raise NotImplementedError

    def list_for_user(
        self,
        *,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        attendance_type: Optional[AttendanceType] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records with ``start <= entrance_time <= end``, newest first."""

        raise NotImplementedError

    def list_active_with_users(self) -> Sequence[ActiveAttendanceRow]:
        raise NotImplementedError
