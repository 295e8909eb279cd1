from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    matched: bool


class JoinStrategy(ABC):
    """Strategy Pattern: encapsulate how a join attempt becomes a status."""

    @abstractmethod
    def decide_join(self, *, teacher_ip: str, student_ip: str) -> StatusDecision:
        raise NotImplementedError
