from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_session_and_student(self, session_id: str, student_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

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
        """Insert a record, or return the existing one for (session_id, student_id)."""

        raise NotImplementedError

    def update_status(self, *, record_id: str, status: AttendanceStatus) -> bool:
        raise NotImplementedError

    def list_for_session(self, session_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_by_status(self) -> Mapping[AttendanceStatus, int]:
        raise NotImplementedError
