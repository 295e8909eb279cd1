class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a session or attendance record does not exist."""


class SessionClosedError(DomainError):
    """Raised when a student tries to join a session that has ended."""


class StoreError(DomainError):
    """Raised when the backing store is unavailable or rejects a write."""
