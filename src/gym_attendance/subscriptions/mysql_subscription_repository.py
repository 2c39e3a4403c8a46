from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from ..core.exceptions import SubscriptionAlreadyExistsError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import HistoricMembership, Subscription
from .repository import SubscriptionRepository


def _to_entry(r: Dict[str, Any]) -> HistoricMembership:
    return HistoricMembership(
        membership_id=str(r["membership_id"]),
        name=r["name"],
        cost=Decimal(str(r["cost"])),
        max_classes_per_cycle=int(r["max_classes_per_cycle"]),
        max_gym_per_cycle=int(r["max_gym_per_cycle"]),
        duration_months=int(r["duration_months"]),
        purchase_date=r["purchase_date"],
    )


class MySQLSubscriptionRepository(SubscriptionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load(self, where: str, value: str) -> Optional[Subscription]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT subscription_id, user_id FROM subscriptions WHERE {where}=%s", (value,))
            head = fetchone(cur)
            if not head:
                return None

            cur.execute(
                """
                SELECT membership_id, name, cost, max_classes_per_cycle, max_gym_per_cycle,
                       duration_months, purchase_date
                FROM subscription_memberships
                WHERE subscription_id=%s
                ORDER BY entry_id ASC
                """,
                (head["subscription_id"],),
            )
            entries = tuple(_to_entry(r) for r in fetchall(cur))
            return Subscription(
                subscription_id=str(head["subscription_id"]),
                user_id=str(head["user_id"]),
                memberships=entries,
            )

    def get_for_user(self, user_id: str) -> Optional[Subscription]:
        return self._load("user_id", user_id)

    def get_by_id(self, subscription_id: str) -> Optional[Subscription]:
        return self._load("subscription_id", subscription_id)

    def create(self, *, subscription_id: str, user_id: str) -> Subscription:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO subscriptions(subscription_id, user_id) VALUES(%s,%s)",
                    (subscription_id, user_id),
                )
        except Exception as exc:
            if is_duplicate_key(exc, key_name="user_id"):
                raise SubscriptionAlreadyExistsError() from exc
            raise
        return Subscription(subscription_id=subscription_id, user_id=user_id)

    def append_membership(self, *, subscription_id: str, entry: HistoricMembership) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO subscription_memberships(
                    subscription_id, membership_id, name, cost,
                    max_classes_per_cycle, max_gym_per_cycle, duration_months, purchase_date
                )
                SELECT subscription_id, %s, %s, %s, %s, %s, %s, %s
                FROM subscriptions
                WHERE subscription_id=%s
                """,
                (
                    entry.membership_id,
                    entry.name,
                    entry.cost,
                    entry.max_classes_per_cycle,
                    entry.max_gym_per_cycle,
                    entry.duration_months,
                    entry.purchase_date,
                    subscription_id,
                ),
            )
            return cur.rowcount > 0
