class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised when required configuration (e.g. a worker's shift) is missing."""


class NotFoundError(DomainError):
    """Raised when a referenced worker, record or payroll does not exist."""


class ConcurrencyError(DomainError):
    """Raised when a record changed since it was read (stale version)."""
