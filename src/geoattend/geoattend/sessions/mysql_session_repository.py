from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Session
from .repository import SessionRepository

_COLUMNS = "session_id, teacher_id, subject, created_at, teacher_ip, is_active"


def _to_session(r: dict) -> Session:
    return Session(
        session_id=str(r["session_id"]),
        teacher_id=str(r["teacher_id"]),
        subject=r["subject"],
        date=r["created_at"],
        teacher_ip=r["teacher_ip"],
        is_active=bool(r["is_active"]),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: str) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM class_sessions WHERE session_id=%s", (session_id,))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def create_replacing_active(
        self,
        *,
        teacher_id: str,
        subject: str,
        teacher_ip: str,
        created_at: datetime,
    ) -> Session:
        session_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            # Row locks on the teacher's active sessions serialize concurrent creators across processes.
            cur.execute(
                "SELECT session_id FROM class_sessions WHERE teacher_id=%s AND is_active=1 FOR UPDATE",
                (teacher_id,),
            )
            fetchall(cur)
            cur.execute(
                "UPDATE class_sessions SET is_active=0 WHERE teacher_id=%s AND is_active=1",
                (teacher_id,),
            )
            cur.execute(
                """
                INSERT INTO class_sessions(session_id, teacher_id, subject, created_at, teacher_ip, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                """,
                (session_id, teacher_id, subject, created_at, teacher_ip),
            )

        return Session(
            session_id=session_id,
            teacher_id=teacher_id,
            subject=subject,
            date=created_at,
            teacher_ip=teacher_ip,
            is_active=True,
        )

    def list_active(self) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM class_sessions
                WHERE is_active=1
                ORDER BY seq ASC
                """
            )
            return [_to_session(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM class_sessions ORDER BY created_at DESC, seq DESC")
            return [_to_session(r) for r in fetchall(cur)]

    def list_for_teacher(self, teacher_id: str) -> Sequence[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM class_sessions
                WHERE teacher_id=%s
                ORDER BY created_at DESC, seq DESC
                """,
                (teacher_id,),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def deactivate(self, session_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE class_sessions SET is_active=0 WHERE session_id=%s", (session_id,))
            return cur.rowcount > 0
