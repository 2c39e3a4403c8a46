from __future__ import annotations

from enum import Enum


class AttendanceType(str, Enum):
    """Loại lượt vào: tập gym tự do hoặc lớp học theo lịch."""

    GYM = "gym"
    CLASS = "class"


class QuotaStatus(str, Enum):
    """Kết quả tính hạn mức: tính được thật sự, hoặc trả 0 do lỗi tra cứu."""

    COMPUTED = "COMPUTED"
    DEGRADED = "DEGRADED"
