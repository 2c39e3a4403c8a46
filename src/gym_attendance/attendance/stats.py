from __future__ import annotations

from datetime import datetime

from ..common.datetime_utils import month_key, now_utc, start_of_year
from ..core.enums import AttendanceType
from ..core.exceptions import UserNotFoundError
from ..users.repository import UserRepository
from .model import AttendanceStats, MonthlyStats
from .repository import AttendanceRepository


class AttendanceStatsService:
    """Thống kê theo năm: tổng theo loại và chia theo tháng (chỉ đọc)."""

    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def yearly_stats(self, user_id: str, *, now: datetime | None = None) -> AttendanceStats:
        now = now or now_utc()

        if not self._users.get_by_id(user_id):
            raise UserNotFoundError()

        records = self._attendance.list_for_user(user_id=user_id, start=start_of_year(now))

        total_gym = 0
        total_classes = 0
        by_month: dict[str, MonthlyStats] = {}
        for r in records:
            key = month_key(r.entrance_time)
            bucket = by_month.get(key)
            if not bucket:
                bucket = MonthlyStats(month=key)
                by_month[key] = bucket

            if r.type == AttendanceType.GYM:
                total_gym += 1
                bucket.gym_count += 1
            else:
                total_classes += 1
                bucket.class_count += 1

        monthly = sorted(by_month.values(), key=lambda m: m.month)
        return AttendanceStats(total_gym=total_gym, total_classes=total_classes, monthly=monthly)
