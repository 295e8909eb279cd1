from __future__ import annotations

import uuid
from datetime import datetime
from typing import Mapping, Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus
from ..core.exceptions import StoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "record_id, session_id, student_id, student_name, status, student_ip, recorded_at"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=str(r["record_id"]),
        session_id=str(r["session_id"]),
        student_id=str(r["student_id"]),
        student_name=r.get("student_name") or "",
        status=AttendanceStatus(r["status"]),
        student_ip=r.get("student_ip") or "",
        timestamp=r["recorded_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (record_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_session_and_student(self, session_id: str, student_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE session_id=%s AND student_id=%s",
                (session_id, student_id),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_or_get(
        self,
        *,
        session_id: str,
        student_id: str,
        student_name: str,
        student_ip: str,
        status: AttendanceStatus,
        timestamp: datetime,
    ) -> AttendanceRecord:
        record_id = uuid.uuid4().hex
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(record_id, session_id, student_id, student_name, status, student_ip, recorded_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (record_id, session_id, student_id, student_name, status.value, student_ip, timestamp),
                )
        except mysql.connector.IntegrityError as e:
            # Another process won the (session_id, student_id) unique key.
            existing = self.get_for_session_and_student(session_id, student_id)
            if existing is None:
                raise StoreError(f"Attendance write conflict: {e}") from e
            return existing

        return AttendanceRecord(
            record_id=record_id,
            session_id=session_id,
            student_id=student_id,
            student_name=student_name,
            status=status,
            student_ip=student_ip,
            timestamp=timestamp,
        )

    def update_status(self, *, record_id: str, status: AttendanceStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET status=%s WHERE record_id=%s",
                (status.value, record_id),
            )
            return cur.rowcount > 0

    def list_for_session(self, session_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE session_id=%s
                ORDER BY recorded_at DESC
                """,
                (session_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE student_id=%s
                ORDER BY recorded_at DESC
                """,
                (student_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records ORDER BY recorded_at DESC")
            return [_to_record(r) for r in fetchall(cur)]

    def count_by_status(self) -> Mapping[AttendanceStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT status, COUNT(*) AS total FROM attendance_records GROUP BY status")
            return {AttendanceStatus(r["status"]): int(r["total"]) for r in fetchall(cur)}
