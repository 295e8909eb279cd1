from __future__ import annotations

import ipaddress
from typing import Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str, max_len: Optional[int] = None) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return require_max_length(value.strip(), field_name, max_len)


def optional_text(value, field_name: str, max_len: Optional[int] = None) -> str:
    """Strip an optional text field; None becomes an empty string."""

    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    return require_max_length(value.strip(), field_name, max_len)


def require_max_length(value: str, field_name: str, max_len: Optional[int]) -> str:
    if max_len is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_ipv4(value: str, field_name: str) -> str:
    """Accept a strict IPv4 dotted quad (four decimal octets, 0-255)."""

    value = require_non_empty(value, field_name)
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid IPv4 address: {value!r}") from None
    return value


def require_status(value) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value).strip().upper())
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"status must be one of {allowed}") from None
