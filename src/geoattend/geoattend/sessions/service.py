from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.locks import KeyedLock
from ..common.validators import require_ipv4, require_non_empty
from ..core.constants import MAX_ID_LENGTH, MAX_TEXT_LENGTH
from ..core.exceptions import NotFoundError
from .model import Session
from .repository import SessionRepository

logger = logging.getLogger("geoattend.sessions")


class SessionService:
    """Session lifecycle: start, discover, end.

    At most one session per teacher is active. Starting a new one supersedes
    the previous one instead of failing.
    """

    def __init__(self, sessions: SessionRepository, *, locks: Optional[KeyedLock] = None):
        self._sessions = sessions
        self._locks = locks or KeyedLock()

    def create_session(
        self,
        teacher_id: str,
        subject: str,
        teacher_ip: str,
        *,
        now: Optional[datetime] = None,
    ) -> Session:
        teacher_id = require_non_empty(teacher_id, "teacherId", MAX_ID_LENGTH)
        subject = require_non_empty(subject, "subject", MAX_TEXT_LENGTH)
        teacher_ip = require_ipv4(teacher_ip, "teacherIp")

        with self._locks.hold(("teacher", teacher_id)):
            session = self._sessions.create_replacing_active(
                teacher_id=teacher_id,
                subject=subject,
                teacher_ip=teacher_ip,
                created_at=now or now_utc(),
            )

        logger.info(
            "Session %s started by teacher %s (%s) from %s",
            session.session_id, teacher_id, subject, teacher_ip,
        )
        return session

    def list_active_sessions(self) -> list[Session]:
        return list(self._sessions.list_active())

    def list_sessions_for_teacher(self, teacher_id: str) -> list[Session]:
        return list(self._sessions.list_for_teacher(teacher_id))

    def list_sessions(self, *, teacher_id: Optional[str] = None, active_only: bool = False) -> list[Session]:
        if teacher_id:
            items = self.list_sessions_for_teacher(teacher_id)
            return [s for s in items if s.is_active] if active_only else items
        if active_only:
            return self.list_active_sessions()
        return list(self._sessions.list_all())

    def get_session(self, session_id: str) -> Session:
        session = self._sessions.get_by_id(session_id)
        if not session:
            raise NotFoundError(f"Session {session_id} not found")
        return session

    def end_session(self, session_id: str) -> Session:
        session = self.get_session(session_id)
        if not session.is_active:
            logger.debug("Session %s already ended", session_id)
            return session

        self._sessions.deactivate(session_id)
        logger.info("Session %s ended", session_id)
        return replace(session, is_active=False)
