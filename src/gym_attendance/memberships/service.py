from __future__ import annotations

from ..core.exceptions import MembershipNotFoundError
from .model import Membership
from .repository import MembershipRepository


class MembershipService:
    def __init__(self, memberships: MembershipRepository):
        self._memberships = memberships

    def get(self, membership_id: str) -> Membership:
        membership = self._memberships.get_by_id(membership_id)
        if not membership:
            raise MembershipNotFoundError()
        return membership

    def list_active(self) -> list[Membership]:
        return list(self._memberships.list_active())
