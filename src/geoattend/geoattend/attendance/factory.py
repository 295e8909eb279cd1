from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_MATCH_PREFIX_OCTETS
from ..core.exceptions import ValidationError
from .strategies.base import JoinStrategy
from .strategies.subnet_strategy import SubnetMatchStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the join strategy from configuration."""

    prefix_octets: int = DEFAULT_MATCH_PREFIX_OCTETS

    def for_join(self) -> JoinStrategy:
        if not 1 <= int(self.prefix_octets) <= 4:
            raise ValidationError(f"MATCH_PREFIX_OCTETS must be between 1 and 4, got {self.prefix_octets}")
        return SubnetMatchStrategy(self.prefix_octets)
