"""Ví dụ: dùng service layer (không qua Flask).

Mục tiêu: minh hoạ Controllers chỉ là lớp mỏng, nghiệp vụ nằm ở Services.
"""

import importlib

from config import get_settings_module

from gym_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    print(container.attendance_service.get_status("user_demo000001").to_dict())
    print(container.stats_service.yearly_stats("user_demo000001").to_dict())


if __name__ == "__main__":
    main()
