"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Leading IPv4 octets that must agree for a student to count as present (a /24).
DEFAULT_MATCH_PREFIX_OCTETS = 3

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 5

# Column widths in database/schema.sql.
MAX_ID_LENGTH = 64
MAX_TEXT_LENGTH = 255
MAX_IP_LENGTH = 45
