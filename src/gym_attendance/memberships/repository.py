from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Membership


class MembershipRepository(Protocol):
    def get_by_id(self, membership_id: str) -> Optional[Membership]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Membership]:
        raise NotImplementedError
