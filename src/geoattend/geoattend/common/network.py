from __future__ import annotations

from typing import Optional, Tuple

from ..core.constants import DEFAULT_MATCH_PREFIX_OCTETS


def parse_octets(address) -> Optional[Tuple[int, int, int, int]]:
    """Split a dotted quad into four integer octets.

    Returns None for anything that is not exactly four dot-separated decimal
    numbers in 0-255. Never raises.
    """

    if not isinstance(address, str):
        return None

    parts = address.strip().split(".")
    if len(parts) != 4:
        return None

    octets = []
    for part in parts:
        if not part or not part.isascii() or not part.isdigit():
            return None
        value = int(part)
        if value > 255:
            return None
        octets.append(value)
    return octets[0], octets[1], octets[2], octets[3]


def subnet_match(a, b, *, prefix_octets: int = DEFAULT_MATCH_PREFIX_OCTETS) -> bool:
    """True when both addresses share their first ``prefix_octets`` octets.

    The host part is ignored so DHCP churn inside one /24 still matches.
    Malformed addresses never match.
    """

    left = parse_octets(a)
    right = parse_octets(b)
    if left is None or right is None:
        return False
    return left[:prefix_octets] == right[:prefix_octets]
