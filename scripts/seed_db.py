"""Seed a demo member, two catalog memberships and a subscription history."""
from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from gym_attendance.container import build_container
from gym_attendance.core.exceptions import SubscriptionAlreadyExistsError
from gym_attendance.database.connection import DBConfig, DatabaseConnection
from gym_attendance.database.mysql_base import db_cursor

DEMO_USER_ID = "user_demo000001"


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")

    settings = importlib.import_module(get_settings_module())
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings.DB_CONFIG))

    with db_cursor(conn) as (_, cur):
        cur.execute(
            "INSERT IGNORE INTO users(user_id, full_name, email) VALUES(%s,%s,%s)",
            (DEMO_USER_ID, "Hội viên Demo", "demo@gym.local"),
        )
        cur.executemany(
            """
            INSERT IGNORE INTO memberships(
                membership_id, name, cost, max_classes_per_cycle, max_gym_per_cycle, duration_months
            ) VALUES(%s,%s,%s,%s,%s,%s)
            """,
            [
                ("mem_basic00001", "Basic", 30, 4, 12, 1),
                ("mem_annual0001", "Annual", 300, 8, 20, 12),
            ],
        )

    container = build_container(db_config=settings.DB_CONFIG)
    try:
        sub = container.subscription_service.create_for_user(DEMO_USER_ID)
        container.subscription_service.add_membership(sub.subscription_id, "mem_basic00001")
    except SubscriptionAlreadyExistsError:
        pass

    print(container.attendance_service.get_status(DEMO_USER_ID).to_dict())


if __name__ == "__main__":
    main()
