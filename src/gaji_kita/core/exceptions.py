class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials or API keys are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class PayrollPeriodExistsError(ValidationError):
    """Raised when payroll for a period has already been processed."""


class StorageError(DomainError):
    """Raised when the database rejects a read or write."""
