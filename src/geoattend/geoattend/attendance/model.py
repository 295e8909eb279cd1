from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance in one session."""

    record_id: str
    session_id: str
    student_id: str
    student_name: str
    status: AttendanceStatus
    student_ip: str
    timestamp: datetime
