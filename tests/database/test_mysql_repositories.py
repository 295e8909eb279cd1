from __future__ import annotations

from datetime import datetime

import mysql.connector
import pytest

from src.geoattend.geoattend.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.geoattend.geoattend.core.enums import AttendanceStatus
from src.geoattend.geoattend.core.exceptions import StoreError
from src.geoattend.geoattend.sessions.mysql_session_repository import MySQLSessionRepository
from tests.fakes import FakeConn, FakeConnFactory, FakeCursor

JOINED_AT = datetime(2026, 2, 1, 8, 0, 0)


def _winner_row() -> dict:
    return {
        "record_id": "winner",
        "session_id": "s1",
        "student_id": "u1",
        "student_name": "Harry",
        "status": "PRESENT",
        "student_ip": "10.0.0.42",
        "recorded_at": JOINED_AT,
    }


def _join(repo: MySQLAttendanceRepository):
    return repo.create_or_get(
        session_id="s1",
        student_id="u1",
        student_name="Harry",
        student_ip="172.16.0.9",
        status=AttendanceStatus.ABSENT,
        timestamp=JOINED_AT,
    )


def test_create_or_get_inserts_in_one_transaction():
    conn = FakeConn(FakeCursor())

    record = _join(MySQLAttendanceRepository(FakeConnFactory(conn)))

    statements = [sql for sql, _ in conn.cur.executed]
    assert len(statements) == 1 and statements[0].startswith("INSERT INTO attendance_records")
    assert conn.commits == 1
    assert record.status == AttendanceStatus.ABSENT
    assert len(record.record_id) == 32


def test_losing_insert_race_returns_the_winning_record():
    duplicate = mysql.connector.IntegrityError("Duplicate entry 's1-u1'")
    insert_conn = FakeConn(FakeCursor(fail_on="INSERT", fail_with=duplicate))
    reread_conn = FakeConn(FakeCursor(rows=[_winner_row()]))

    record = _join(MySQLAttendanceRepository(FakeConnFactory(insert_conn, reread_conn)))

    assert record.record_id == "winner"
    assert record.status == AttendanceStatus.PRESENT
    assert record.student_ip == "10.0.0.42"
    assert insert_conn.rolled_back and insert_conn.commits == 0
    assert reread_conn.cur.executed[0][1] == ("s1", "u1")


def test_integrity_error_without_existing_record_is_store_error():
    missing_session = mysql.connector.IntegrityError("Cannot add or update a child row")
    insert_conn = FakeConn(FakeCursor(fail_on="INSERT", fail_with=missing_session))
    reread_conn = FakeConn(FakeCursor(rows=[]))

    with pytest.raises(StoreError):
        _join(MySQLAttendanceRepository(FakeConnFactory(insert_conn, reread_conn)))


def test_create_replacing_active_deactivates_and_inserts_under_one_commit():
    conn = FakeConn(FakeCursor())
    factory = FakeConnFactory(conn)

    session = MySQLSessionRepository(factory).create_replacing_active(
        teacher_id="t1", subject="Math", teacher_ip="10.0.0.5", created_at=JOINED_AT,
    )

    statements = [sql for sql, _ in conn.cur.executed]
    assert len(factory.opened) == 1
    assert conn.commits == 1
    assert statements[0].endswith("FOR UPDATE")
    assert statements[1].startswith("UPDATE class_sessions SET is_active=0 WHERE teacher_id=%s")
    assert statements[2].startswith("INSERT INTO class_sessions")
    assert session.is_active is True and session.teacher_id == "t1"


def test_failed_insert_rolls_back_the_deactivation():
    conn = FakeConn(FakeCursor(fail_on="INSERT", fail_with=mysql.connector.Error("lock wait timeout")))

    with pytest.raises(StoreError):
        MySQLSessionRepository(FakeConnFactory(conn)).create_replacing_active(
            teacher_id="t1", subject="Math", teacher_ip="10.0.0.5", created_at=JOINED_AT,
        )

    assert conn.rolled_back and conn.commits == 0


def test_active_sessions_are_listed_in_insertion_order():
    conn = FakeConn(FakeCursor())

    MySQLSessionRepository(FakeConnFactory(conn)).list_active()

    assert conn.cur.executed[0][0].endswith("WHERE is_active=1 ORDER BY seq ASC")
