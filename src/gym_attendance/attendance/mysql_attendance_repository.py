from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Sequence

from ..core.enums import AttendanceType
from ..core.exceptions import AlreadyInsideError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import ActiveAttendanceRow, AttendanceRecord
from .repository import AttendanceRepository

ONE_ACTIVE_KEY = "uq_attendance_one_active"

_COLUMNS = "attendance_id, user_id, entrance_time, exit_time, type, date_key, is_active"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=str(r["attendance_id"]),
        user_id=str(r["user_id"]),
        entrance_time=r["entrance_time"],
        exit_time=r.get("exit_time"),
        type=AttendanceType(r["type"]),
        date_key=str(r["date_key"]),
        is_active=bool(r["is_active"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (attendance_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_active_for_user(self, user_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND is_active=1",
                (user_id,),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_checkin(
        self,
        *,
        attendance_id: str,
        user_id: str,
        entrance_time: datetime,
        attendance_type: AttendanceType,
        date_key: str,
    ) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(attendance_id, user_id, entrance_time, type, date_key, is_active)
                    VALUES(%s,%s,%s,%s,%s,1)
                    """,
                    (attendance_id, user_id, entrance_time, attendance_type.value, date_key),
                )
        except Exception as exc:
            # uq_attendance_one_active rejects a second open row for the same user.
            if is_duplicate_key(exc, key_name=ONE_ACTIVE_KEY):
                raise AlreadyInsideError() from exc
            raise

        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            entrance_time=entrance_time,
            exit_time=None,
            type=attendance_type,
            date_key=date_key,
            is_active=True,
        )

    def update_checkout(self, *, attendance_id: str, exit_time: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET exit_time=GREATEST(%s, entrance_time), is_active=0
                WHERE attendance_id=%s AND is_active=1
                """,
                (exit_time, attendance_id),
            )
            return cur.rowcount > 0

    def count_by_type_between(self, *, user_id: str, start: datetime, end: datetime) -> Mapping[AttendanceType, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT type, COUNT(*) AS total
                FROM attendance_records
                WHERE user_id=%s AND entrance_time >= %s AND entrance_time < %s
                GROUP BY type
                """,
                (user_id, start, end),
            )
            counts = {t: 0 for t in AttendanceType}
            for r in fetchall(cur):
                counts[AttendanceType(r["type"])] = int(r["total"])
            return counts

    def list_for_user(
        self,
        *,
        user_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        attendance_type: Optional[AttendanceType] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["user_id=%s"]
        params: list[object] = [user_id]

        if start is not None:
            clauses.append("entrance_time >= %s")
            params.append(start)
        if end is not None:
            clauses.append("entrance_time <= %s")
            params.append(end)
        if attendance_type is not None:
            clauses.append("type=%s")
            params.append(attendance_type.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY entrance_time DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_active_with_users(self) -> Sequence[ActiveAttendanceRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    ar.attendance_id, ar.user_id, ar.entrance_time, ar.exit_time,
                    ar.type, ar.date_key, ar.is_active,
                    u.full_name, u.email
                FROM attendance_records ar
                JOIN users u ON u.user_id = ar.user_id
                WHERE ar.is_active = 1
                ORDER BY ar.entrance_time DESC
                """
            )
            return [
                ActiveAttendanceRow(record=_to_record(r), full_name=r["full_name"], email=r.get("email"))
                for r in fetchall(cur)
            ]
