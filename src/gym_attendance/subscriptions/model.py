from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from ..common.datetime_utils import to_iso_utc
from ..memberships.model import Membership


@dataclass(frozen=True)
class HistoricMembership:
    """Bản chụp điều khoản gói tập tại thời điểm mua; không bao giờ bị sửa."""

    membership_id: str
    name: str
    cost: Decimal
    max_classes_per_cycle: int
    max_gym_per_cycle: int
    duration_months: int
    purchase_date: datetime

    @classmethod
    def snapshot(cls, membership: Membership, *, purchase_date: datetime) -> "HistoricMembership":
        return cls(
            membership_id=membership.membership_id,
            name=membership.name,
            cost=membership.cost,
            max_classes_per_cycle=membership.max_classes_per_cycle,
            max_gym_per_cycle=membership.max_gym_per_cycle,
            duration_months=membership.duration_months,
            purchase_date=purchase_date,
        )

    def to_dict(self) -> dict:
        return {
            "membershipId": self.membership_id,
            "name": self.name,
            "cost": float(self.cost),
            "maxClassesPerCycle": self.max_classes_per_cycle,
            "maxGymPerCycle": self.max_gym_per_cycle,
            "durationMonths": self.duration_months,
            "purchaseDate": to_iso_utc(self.purchase_date),
        }


@dataclass(frozen=True)
class Subscription:
    """One per user; ``memberships`` is the purchase history in purchase order."""

    subscription_id: str
    user_id: str
    memberships: tuple[HistoricMembership, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.subscription_id,
            "userId": self.user_id,
            "memberships": [m.to_dict() for m in self.memberships],
        }
