from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso_utc
from ..core.enums import AttendanceType, QuotaStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Một lượt vào phòng tập (check-in/check-out)."""

    attendance_id: str
    user_id: str
    entrance_time: datetime
    exit_time: Optional[datetime]
    type: AttendanceType
    date_key: str
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "userId": self.user_id,
            "entranceTime": to_iso_utc(self.entrance_time),
            "exitTime": to_iso_utc(self.exit_time),
            "type": self.type.value,
            "dateKey": self.date_key,
            "isActive": self.is_active,
        }


@dataclass(frozen=True)
class ActiveAttendanceRow:
    """Read-model: lượt đang mở kèm thông tin tóm tắt của hội viên."""

    record: AttendanceRecord
    full_name: str
    email: Optional[str]

    def to_dict(self) -> dict:
        out = self.record.to_dict()
        out["user"] = {
            "id": self.record.user_id,
            "fullName": self.full_name,
            "email": self.email,
        }
        return out


@dataclass(frozen=True)
class Quota:
    gym: int = 0
    classes: int = 0

    def remaining(self, attendance_type: AttendanceType) -> int:
        return self.gym if attendance_type == AttendanceType.GYM else self.classes

    def to_dict(self) -> dict:
        return {"gym": self.gym, "classes": self.classes}


@dataclass(frozen=True)
class QuotaResult:
    """Hạn mức còn lại trong tháng.

    ``DEGRADED`` means the lookup failed and the zero quota is a fail-closed
    fallback, not a real zero allowance.
    """

    quota: Quota
    status: QuotaStatus = QuotaStatus.COMPUTED
    cause: Optional[str] = None

    @classmethod
    def computed(cls, *, gym: int, classes: int) -> "QuotaResult":
        return cls(quota=Quota(gym=max(0, gym), classes=max(0, classes)))

    @classmethod
    def degraded(cls, cause: str) -> "QuotaResult":
        return cls(quota=Quota(), status=QuotaStatus.DEGRADED, cause=cause)

    @property
    def is_degraded(self) -> bool:
        return self.status == QuotaStatus.DEGRADED


@dataclass(frozen=True)
class AttendanceStatusView:
    is_inside: bool
    current_attendance: Optional[AttendanceRecord]
    available: QuotaResult

    def to_dict(self) -> dict:
        out: dict = {
            "isInside": self.is_inside,
            "availableAttendances": self.available.quota.to_dict(),
        }
        if self.current_attendance is not None:
            out["currentAttendance"] = {
                "id": self.current_attendance.attendance_id,
                "entranceTime": to_iso_utc(self.current_attendance.entrance_time),
                "type": self.current_attendance.type.value,
            }
        return out


@dataclass
class MonthlyStats:
    month: str
    gym_count: int = 0
    class_count: int = 0

    def to_dict(self) -> dict:
        return {"month": self.month, "gymCount": self.gym_count, "classCount": self.class_count}


@dataclass(frozen=True)
class AttendanceStats:
    total_gym: int
    total_classes: int
    monthly: list[MonthlyStats] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totalGym": self.total_gym,
            "totalClasses": self.total_classes,
            "monthly": [m.to_dict() for m in self.monthly],
        }
