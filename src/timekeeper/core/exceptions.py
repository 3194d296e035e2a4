class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ClockSequenceError(ValidationError):
    """Raised when a clock-out is attempted before its clock-in."""


class DuplicatePunchError(ValidationError):
    """Raised when a slot of the day's log was already stamped."""


class NotFoundError(DomainError):
    """Raised when a referenced user or record does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""
