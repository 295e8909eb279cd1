from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.locks import KeyedLock
from ..common.validators import optional_text, require_non_empty, require_status
from ..core.constants import MAX_ID_LENGTH, MAX_IP_LENGTH, MAX_TEXT_LENGTH
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, SessionClosedError
from ..sessions.repository import SessionRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger("geoattend.attendance")


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        sessions: SessionRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        locks: KeyedLock | None = None,
    ):
        self._attendance = attendance
        self._sessions = sessions
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._locks = locks or KeyedLock()

    def mark_attendance(
        self,
        session_id: str,
        student_id: str,
        student_name: str,
        student_ip: str,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        """Record a student's join attempt.

        The first join for a (session, student) pair decides the status; any
        later join returns that record untouched, even from another address.
        """

        student_id = require_non_empty(student_id, "studentId", MAX_ID_LENGTH)
        student_name = optional_text(student_name, "studentName", MAX_TEXT_LENGTH)
        student_ip = student_ip.strip() if isinstance(student_ip, str) else ""

        session = self._sessions.get_by_id(session_id)
        if not session:
            raise NotFoundError(f"Session {session_id} not found")
        if not session.is_active:
            raise SessionClosedError(f"Session {session_id} is closed")

        with self._locks.hold(("join", session.session_id, student_id)):
            existing = self._attendance.get_for_session_and_student(session.session_id, student_id)
            if existing:
                logger.debug("Duplicate join by %s for session %s ignored", student_id, session.session_id)
                return existing

            decision = self._factory.for_join().decide_join(teacher_ip=session.teacher_ip, student_ip=student_ip)
            record = self._attendance.create_or_get(
                session_id=session.session_id,
                student_id=student_id,
                student_name=student_name,
                # A malformed address is still recorded, clipped to the column width.
                student_ip=student_ip[:MAX_IP_LENGTH],
                status=decision.status,
                timestamp=now or now_utc(),
            )

        logger.info(
            "Student %s joined session %s from %s: %s",
            student_id, session.session_id, student_ip or "-", record.status.value,
        )
        return record

    def update_status(self, record_id: str, new_status) -> AttendanceRecord:
        """Teacher override. Any status may replace any other."""

        status = require_status(new_status)
        record = self.get_record(record_id)

        if record.status != status:
            self._attendance.update_status(record_id=record.record_id, status=status)
            logger.info(
                "Record %s overridden: %s -> %s", record.record_id, record.status.value, status.value,
            )
        return replace(record, status=status)

    def get_record(self, record_id: str) -> AttendanceRecord:
        record = self._attendance.get_by_id(record_id)
        if not record:
            raise NotFoundError(f"Attendance record {record_id} not found")
        return record

    def list_for_session(self, session_id: str) -> list[AttendanceRecord]:
        return list(self._attendance.list_for_session(session_id))

    def list_for_student(self, student_id: str) -> list[AttendanceRecord]:
        return list(self._attendance.list_for_student(student_id))

    def list_records(
        self,
        *,
        session_id: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> list[AttendanceRecord]:
        if session_id:
            items = self.list_for_session(session_id)
            return [r for r in items if r.student_id == student_id] if student_id else items
        if student_id:
            return self.list_for_student(student_id)
        return list(self._attendance.list_all())

    def aggregate_status_counts(self) -> dict[AttendanceStatus, int]:
        counts = {status: 0 for status in AttendanceStatus}
        for status, total in self._attendance.count_by_status().items():
            counts[AttendanceStatus(status)] = int(total)
        return counts
