from __future__ import annotations

from ...common.network import subnet_match
from ...core.constants import DEFAULT_MATCH_PREFIX_OCTETS
from ...core.enums import AttendanceStatus
from .base import JoinStrategy, StatusDecision


class SubnetMatchStrategy(JoinStrategy):
    """PRESENT when the student shares the teacher's leading octets, else ABSENT."""

    def __init__(self, prefix_octets: int = DEFAULT_MATCH_PREFIX_OCTETS):
        self.prefix_octets = int(prefix_octets)

    def decide_join(self, *, teacher_ip: str, student_ip: str) -> StatusDecision:
        matched = subnet_match(teacher_ip, student_ip, prefix_octets=self.prefix_octets)
        status = AttendanceStatus.PRESENT if matched else AttendanceStatus.ABSENT
        return StatusDecision(status=status, matched=matched)
