from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from config import get_settings_module

from gym_attendance.database.bootstrap import apply_schema, list_tables
from gym_attendance.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")

    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_mapping(settings.DB_CONFIG)
    conn = DatabaseConnection.get_instance(config)

    apply_schema(conn)
    tables = list_tables(conn)
    print(f"OK: Applied schema.sql -> {config.user}@{config.host}:{config.port}/{config.database} (tables={len(tables)})")


if __name__ == "__main__":
    main()
