class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced staff member does not exist."""


class SequenceOrderError(DomainError):
    """Raised when a day sequence is unordered, gapped or mixes users."""


class SupersededRequestError(DomainError):
    """Raised when a newer report request for the same key has started."""
