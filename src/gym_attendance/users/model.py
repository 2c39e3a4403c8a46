from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Thực thể miền (domain): Hội viên / người dùng.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    """

    user_id: str
    full_name: str
    email: Optional[str]
    is_active: bool = True
