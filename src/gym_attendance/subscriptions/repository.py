from __future__ import annotations

from typing import Optional, Protocol

from .model import HistoricMembership, Subscription


class SubscriptionRepository(Protocol):
    """Giao diện repository cho Subscription (lịch sử gói đã mua của hội viên)."""

    def get_for_user(self, user_id: str) -> Optional[Subscription]:
        raise NotImplementedError

    def get_by_id(self, subscription_id: str) -> Optional[Subscription]:
        raise NotImplementedError

    def create(self, *, subscription_id: str, user_id: str) -> Subscription:
        raise NotImplementedError

    def append_membership(self, *, subscription_id: str, entry: HistoricMembership) -> bool:
        """Append one snapshot. Returns False when the subscription does not exist."""

        raise NotImplementedError
