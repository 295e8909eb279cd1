from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status stored for a student in a session."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
