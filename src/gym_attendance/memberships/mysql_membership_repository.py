from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Membership
from .repository import MembershipRepository


def _to_membership(r: Dict[str, Any]) -> Membership:
    return Membership(
        membership_id=str(r["membership_id"]),
        name=r["name"],
        cost=Decimal(str(r["cost"])),
        max_classes_per_cycle=int(r["max_classes_per_cycle"]),
        max_gym_per_cycle=int(r["max_gym_per_cycle"]),
        duration_months=int(r["duration_months"]),
        status=bool(r.get("status", True)),
    )


class MySQLMembershipRepository(MembershipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, membership_id: str) -> Optional[Membership]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT membership_id, name, cost, status, max_classes_per_cycle, max_gym_per_cycle, duration_months
                FROM memberships
                WHERE membership_id=%s
                """,
                (membership_id,),
            )
            r = fetchone(cur)
            return _to_membership(r) if r else None

    def list_active(self) -> Sequence[Membership]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT membership_id, name, cost, status, max_classes_per_cycle, max_gym_per_cycle, duration_months
                FROM memberships
                WHERE status=1
                ORDER BY cost ASC, name ASC
                """
            )
            return [_to_membership(r) for r in fetchall(cur)]
