from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Session:
    """Domain entity: a teacher's attendance window anchored to one IPv4 address."""

    session_id: str
    teacher_id: str
    subject: str
    date: datetime
    teacher_ip: str
    is_active: bool
