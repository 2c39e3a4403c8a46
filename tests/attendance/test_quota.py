from __future__ import annotations

from datetime import datetime

from gym_attendance.attendance.model import AttendanceRecord
from gym_attendance.attendance.quota import QuotaCalculator
from gym_attendance.core.enums import AttendanceType, QuotaStatus


def _record(rid: str, when: datetime, kind: AttendanceType, user_id: str = "U1") -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=rid,
        user_id=user_id,
        entrance_time=when,
        exit_time=when,
        type=kind,
        date_key=when.strftime("%Y-%m-%d"),
        is_active=False,
    )


def test_allowance_sums_every_historic_membership(attendance_repo, subscriptions, fixed_now):
    subscriptions.grant("U1", gym=5, classes=1, purchase_date=datetime(2024, 6, 1))
    subscriptions.grant("U1", gym=10, classes=2, purchase_date=datetime(2025, 2, 1))
    calc = QuotaCalculator(subscriptions, attendance_repo)

    result = calc.available_attendances("U1", now=fixed_now)

    assert result.status == QuotaStatus.COMPUTED
    assert result.quota.gym == 15
    assert result.quota.classes == 3


def test_only_current_month_usage_counts(attendance_repo, subscriptions, fixed_now):
    subscriptions.grant("U1", gym=3, classes=2)
    attendance_repo.add(_record("a1", datetime(2025, 2, 28, 23, 59, 59), AttendanceType.GYM))
    attendance_repo.add(_record("a2", datetime(2025, 3, 1, 0, 0, 0), AttendanceType.GYM))
    attendance_repo.add(_record("a3", datetime(2025, 3, 31, 23, 0, 0), AttendanceType.CLASS))
    attendance_repo.add(_record("a4", datetime(2025, 4, 1, 0, 0, 0), AttendanceType.CLASS))
    attendance_repo.add(_record("a5", datetime(2025, 3, 10), AttendanceType.GYM, user_id="U2"))
    calc = QuotaCalculator(subscriptions, attendance_repo)

    quota = calc.available_attendances("U1", now=fixed_now).quota

    assert quota.gym == 2
    assert quota.classes == 1


def test_remaining_is_clamped_at_zero(attendance_repo, subscriptions, fixed_now):
    subscriptions.grant("U1", gym=1, classes=0)
    for i in range(4):
        attendance_repo.add(_record(f"g{i}", datetime(2025, 3, 2 + i), AttendanceType.GYM))
    attendance_repo.add(_record("c0", datetime(2025, 3, 9), AttendanceType.CLASS))
    calc = QuotaCalculator(subscriptions, attendance_repo)

    quota = calc.available_attendances("U1", now=fixed_now).quota

    assert quota.gym == 0
    assert quota.classes == 0


def test_empty_subscription_is_a_real_zero(attendance_repo, subscriptions, fixed_now):
    subscriptions.create(subscription_id="sub_1", user_id="U1")
    calc = QuotaCalculator(subscriptions, attendance_repo)

    result = calc.available_attendances("U1", now=fixed_now)

    assert not result.is_degraded
    assert result.quota.to_dict() == {"gym": 0, "classes": 0}


class BrokenSubscriptions:
    def get_for_user(self, user_id):
        raise ConnectionError("mysql is down")


def test_lookup_failure_degrades_to_zero_quota(attendance_repo, fixed_now, caplog):
    calc = QuotaCalculator(BrokenSubscriptions(), attendance_repo)

    with caplog.at_level("WARNING", logger="gym_attendance.attendance.quota"):
        result = calc.available_attendances("U1", now=fixed_now)

    assert result.is_degraded
    assert result.quota.gym == 0 and result.quota.classes == 0
    assert "mysql is down" in result.cause
    assert any("Quota lookup failed" in r.getMessage() for r in caplog.records)
    assert calc.has_available_attendances("U1", AttendanceType.GYM, now=fixed_now) == 0


def test_has_available_attendances_returns_the_requested_kind(attendance_repo, subscriptions, fixed_now):
    subscriptions.grant("U1", gym=7, classes=4)
    calc = QuotaCalculator(subscriptions, attendance_repo)

    assert calc.has_available_attendances("U1", AttendanceType.GYM, now=fixed_now) == 7
    assert calc.has_available_attendances("U1", AttendanceType.CLASS, now=fixed_now) == 4
