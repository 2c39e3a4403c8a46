from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Membership:
    """Thực thể miền (domain): Gói tập trong danh mục (nguồn điều khoản khi mua)."""

    membership_id: str
    name: str
    cost: Decimal
    max_classes_per_cycle: int
    max_gym_per_cycle: int
    duration_months: int
    status: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.membership_id,
            "name": self.name,
            "cost": float(self.cost),
            "status": self.status,
            "maxClassesPerCycle": self.max_classes_per_cycle,
            "maxGymPerCycle": self.max_gym_per_cycle,
            "durationMonths": self.duration_months,
        }
