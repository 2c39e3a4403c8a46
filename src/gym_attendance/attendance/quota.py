from __future__ import annotations

import logging
from datetime import datetime

from ..common.datetime_utils import month_window, now_utc
from ..core.enums import AttendanceType
from ..subscriptions.repository import SubscriptionRepository
from .model import QuotaResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class QuotaCalculator:
    """Số lượt gym/lớp còn lại trong tháng hiện tại (UTC).

    Allowance is the sum over every historic membership the user ever bought,
    minus what was used since the first day of the current month. Lookup
    failures fail closed: the result is a zero quota marked ``DEGRADED``.
    """

    def __init__(self, subscriptions: SubscriptionRepository, attendance: AttendanceRepository):
        self._subscriptions = subscriptions
        self._attendance = attendance

    def available_attendances(self, user_id: str, *, now: datetime | None = None) -> QuotaResult:
        now = now or now_utc()
        try:
            return self._compute(user_id, now)
        except Exception as exc:
            logger.warning("Quota lookup failed for user %s, treating as no allowance", user_id, exc_info=True)
            return QuotaResult.degraded(f"{type(exc).__name__}: {exc}")

    def has_available_attendances(
        self, user_id: str, attendance_type: AttendanceType, *, now: datetime | None = None
    ) -> int:
        return self.available_attendances(user_id, now=now).quota.remaining(attendance_type)

    def _compute(self, user_id: str, now: datetime) -> QuotaResult:
        subscription = self._subscriptions.get_for_user(user_id)
        if not subscription or not subscription.memberships:
            return QuotaResult.computed(gym=0, classes=0)

        total_gym = sum(m.max_gym_per_cycle or 0 for m in subscription.memberships)
        total_classes = sum(m.max_classes_per_cycle or 0 for m in subscription.memberships)

        start, end = month_window(now)
        used = self._attendance.count_by_type_between(user_id=user_id, start=start, end=end)

        return QuotaResult.computed(
            gym=total_gym - int(used.get(AttendanceType.GYM, 0)),
            classes=total_classes - int(used.get(AttendanceType.CLASS, 0)),
        )
