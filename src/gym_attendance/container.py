from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.quota import QuotaCalculator
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.stats import AttendanceStatsService
from .database.connection import DBConfig, DatabaseConnection
from .memberships.mysql_membership_repository import MySQLMembershipRepository
from .memberships.repository import MembershipRepository
from .memberships.service import MembershipService
from .subscriptions.mysql_subscription_repository import MySQLSubscriptionRepository
from .subscriptions.repository import SubscriptionRepository
from .subscriptions.service import SubscriptionService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    memberships_repo: MembershipRepository
    subscriptions_repo: SubscriptionRepository
    attendance_repo: AttendanceRepository

    quota_calculator: QuotaCalculator
    attendance_service: AttendanceService
    stats_service: AttendanceStatsService
    membership_service: MembershipService
    subscription_service: SubscriptionService


def build_services(
    *,
    users_repo: UserRepository,
    memberships_repo: MembershipRepository,
    subscriptions_repo: SubscriptionRepository,
    attendance_repo: AttendanceRepository,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""

    quota_calculator = QuotaCalculator(subscriptions_repo, attendance_repo)
    return Container(
        users_repo=users_repo,
        memberships_repo=memberships_repo,
        subscriptions_repo=subscriptions_repo,
        attendance_repo=attendance_repo,
        quota_calculator=quota_calculator,
        attendance_service=AttendanceService(attendance_repo, users_repo, quota_calculator),
        stats_service=AttendanceStatsService(attendance_repo, users_repo),
        membership_service=MembershipService(memberships_repo),
        subscription_service=SubscriptionService(subscriptions_repo, memberships_repo, users_repo),
    )


def build_container(*, db_config: Mapping) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return build_services(
        users_repo=MySQLUserRepository(conn),
        memberships_repo=MySQLMembershipRepository(conn),
        subscriptions_repo=MySQLSubscriptionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
    )
