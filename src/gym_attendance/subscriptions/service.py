from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from ..common.datetime_utils import now_utc
from ..common.ids import generate_subscription_id
from ..core.exceptions import (
    MembershipNotFoundError,
    SubscriptionAlreadyExistsError,
    SubscriptionNotFoundError,
    UserNotFoundError,
)
from ..memberships.repository import MembershipRepository
from ..users.repository import UserRepository
from .model import HistoricMembership, Subscription
from .repository import SubscriptionRepository

logger = logging.getLogger(__name__)


class SubscriptionService:
    """Lịch sử mua gói của hội viên.

    Purchases copy the catalog terms into a ``HistoricMembership``; later edits
    to the catalog never reach entries that were already appended.
    """

    def __init__(
        self,
        subscriptions: SubscriptionRepository,
        memberships: MembershipRepository,
        users: UserRepository,
        *,
        id_factory: Callable[[], str] = generate_subscription_id,
    ):
        self._subscriptions = subscriptions
        self._memberships = memberships
        self._users = users
        self._id_factory = id_factory

    def get_for_user(self, user_id: str) -> Subscription:
        subscription = self._subscriptions.get_for_user(user_id)
        if not subscription:
            raise SubscriptionNotFoundError()
        return subscription

    def create_for_user(self, user_id: str) -> Subscription:
        if not self._users.get_by_id(user_id):
            raise UserNotFoundError()
        if self._subscriptions.get_for_user(user_id):
            raise SubscriptionAlreadyExistsError()

        subscription = self._subscriptions.create(subscription_id=self._id_factory(), user_id=user_id)
        logger.info("Created subscription %s for user %s", subscription.subscription_id, user_id)
        return subscription

    def add_membership(self, subscription_id: str, membership_id: str, *, now: datetime | None = None) -> Subscription:
        now = now or now_utc()

        membership = self._memberships.get_by_id(membership_id)
        if not membership:
            raise MembershipNotFoundError()

        entry = HistoricMembership.snapshot(membership, purchase_date=now)
        if not self._subscriptions.append_membership(subscription_id=subscription_id, entry=entry):
            raise SubscriptionNotFoundError()

        logger.info("Appended membership %s to subscription %s", membership_id, subscription_id)
        updated = self._subscriptions.get_by_id(subscription_id)
        if not updated:
            raise SubscriptionNotFoundError()
        return updated
