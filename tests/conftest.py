from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Optional

import pytest

from gym_attendance.attendance.model import ActiveAttendanceRow, AttendanceRecord
from gym_attendance.container import build_services
from gym_attendance.core.enums import AttendanceType
from gym_attendance.core.exceptions import AlreadyInsideError, SubscriptionAlreadyExistsError
from gym_attendance.memberships.model import Membership
from gym_attendance.subscriptions.model import HistoricMembership, Subscription
from gym_attendance.users.model import User


@dataclass
class InMemoryUsers:
    users_by_id: dict[str, User] = field(default_factory=dict)

    def add(self, user_id: str, full_name: str = "Member", email: Optional[str] = None) -> User:
        user = User(user_id=user_id, full_name=full_name, email=email or f"{user_id}@gym.local")
        self.users_by_id[user_id] = user
        return user

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.users_by_id.get(user_id)


@dataclass
class InMemoryMemberships:
    items: dict[str, Membership] = field(default_factory=dict)

    def add(self, membership_id: str, *, gym: int, classes: int, name: Optional[str] = None, status: bool = True) -> Membership:
        m = Membership(
            membership_id=membership_id,
            name=name or membership_id,
            cost=Decimal("30.00"),
            max_classes_per_cycle=classes,
            max_gym_per_cycle=gym,
            duration_months=1,
            status=status,
        )
        self.items[membership_id] = m
        return m

    def get_by_id(self, membership_id: str) -> Optional[Membership]:
        return self.items.get(membership_id)

    def list_active(self):
        return [m for m in self.items.values() if m.status]


class InMemorySubscriptions:
    def __init__(self):
        self._by_id: dict[str, Subscription] = {}

    def get_for_user(self, user_id: str) -> Optional[Subscription]:
        for s in self._by_id.values():
            if s.user_id == user_id:
                return s
        return None

    def get_by_id(self, subscription_id: str) -> Optional[Subscription]:
        return self._by_id.get(subscription_id)

    def create(self, *, subscription_id: str, user_id: str) -> Subscription:
        if self.get_for_user(user_id):
            raise SubscriptionAlreadyExistsError()
        sub = Subscription(subscription_id=subscription_id, user_id=user_id)
        self._by_id[subscription_id] = sub
        return sub

    def append_membership(self, *, subscription_id: str, entry: HistoricMembership) -> bool:
        sub = self._by_id.get(subscription_id)
        if not sub:
            return False
        self._by_id[subscription_id] = replace(sub, memberships=sub.memberships + (entry,))
        return True

    def grant(self, user_id: str, *, gym: int, classes: int, purchase_date: Optional[datetime] = None) -> None:
        """Test helper: give ``user_id`` one more historic membership."""

        sub = self.get_for_user(user_id) or self.create(subscription_id=f"sub_{user_id}", user_id=user_id)
        entry = HistoricMembership(
            membership_id=f"mem_{len(sub.memberships) + 1}",
            name="Plan",
            cost=Decimal("30.00"),
            max_classes_per_cycle=classes,
            max_gym_per_cycle=gym,
            duration_months=1,
            purchase_date=purchase_date or datetime(2025, 1, 1),
        )
        self.append_membership(subscription_id=sub.subscription_id, entry=entry)


class InMemoryAttendance:
    """Ledger fake; the lock plays the role of the unique active-record index."""

    def __init__(self, users: Optional[InMemoryUsers] = None):
        self._records: dict[str, AttendanceRecord] = {}
        self._lock = threading.Lock()
        self._users = users

    def all(self) -> list[AttendanceRecord]:
        return list(self._records.values())

    def add(self, record: AttendanceRecord) -> None:
        self._records[record.attendance_id] = record

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        return self._records.get(attendance_id)

    def _find_active(self, user_id: str) -> Optional[AttendanceRecord]:
        for r in self._records.values():
            if r.user_id == user_id and r.is_active:
                return r
        return None

    def get_active_for_user(self, user_id: str) -> Optional[AttendanceRecord]:
        return self._find_active(user_id)

    def create_checkin(self, *, attendance_id, user_id, entrance_time, attendance_type, date_key) -> AttendanceRecord:
        with self._lock:
            if self._find_active(user_id):
                raise AlreadyInsideError()
            rec = AttendanceRecord(
                attendance_id=attendance_id,
                user_id=user_id,
                entrance_time=entrance_time,
                exit_time=None,
                type=attendance_type,
                date_key=date_key,
                is_active=True,
            )
            self._records[attendance_id] = rec
            return rec

    def update_checkout(self, *, attendance_id: str, exit_time: datetime) -> bool:
        with self._lock:
            rec = self._records.get(attendance_id)
            if not rec or not rec.is_active:
                return False
            self._records[attendance_id] = replace(rec, exit_time=max(exit_time, rec.entrance_time), is_active=False)
            return True

    def count_by_type_between(self, *, user_id: str, start: datetime, end: datetime):
        counts = {t: 0 for t in AttendanceType}
        for r in self._records.values():
            if r.user_id == user_id and start <= r.entrance_time < end:
                counts[r.type] += 1
        return counts

    def list_for_user(self, *, user_id: str, start=None, end=None, attendance_type=None):
        items = [
            r
            for r in self._records.values()
            if r.user_id == user_id
            and (start is None or r.entrance_time >= start)
            and (end is None or r.entrance_time <= end)
            and (attendance_type is None or r.type == attendance_type)
        ]
        items.sort(key=lambda r: r.entrance_time, reverse=True)
        return items

    def list_active_with_users(self):
        rows = []
        for r in sorted(self._records.values(), key=lambda r: r.entrance_time, reverse=True):
            if not r.is_active:
                continue
            user = self._users.get_by_id(r.user_id) if self._users else None
            if user:
                rows.append(ActiveAttendanceRow(record=r, full_name=user.full_name, email=user.email))
        return rows


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 15, 9, 30, 0)


@pytest.fixture
def users() -> InMemoryUsers:
    repo = InMemoryUsers()
    repo.add("U1", "Nguyễn Văn A")
    return repo


@pytest.fixture
def memberships() -> InMemoryMemberships:
    return InMemoryMemberships()


@pytest.fixture
def subscriptions() -> InMemorySubscriptions:
    return InMemorySubscriptions()


@pytest.fixture
def attendance_repo(users) -> InMemoryAttendance:
    return InMemoryAttendance(users)


@pytest.fixture
def container(users, memberships, subscriptions, attendance_repo):
    return build_services(
        users_repo=users,
        memberships_repo=memberships,
        subscriptions_repo=subscriptions,
        attendance_repo=attendance_repo,
    )


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from gym_attendance.main import create_app

    app = create_app(container)
    return app.test_client()
