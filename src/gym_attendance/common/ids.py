from __future__ import annotations

import secrets
import string

from ..core.constants import ATTENDANCE_ID_PREFIX, GENERATED_ID_LENGTH, SUBSCRIPTION_ID_PREFIX

_ALPHABET = string.ascii_letters + string.digits


def _token(length: int = GENERATED_ID_LENGTH) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_attendance_id() -> str:
    return f"{ATTENDANCE_ID_PREFIX}{_token()}"


def generate_subscription_id() -> str:
    return f"{SUBSCRIPTION_ID_PREFIX}{_token()}"
