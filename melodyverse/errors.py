"""Custom domain exceptions for the application."""

# Stable, machine-readable error codes for API consumers.
NOT_FOUND = "NOT_FOUND"
CONFLICT = "CONFLICT"
VALIDATION_ERROR = "VALIDATION_ERROR"
UNAUTHORIZED = "UNAUTHORIZED"
INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist."""

    pass


class ConflictError(DomainError):
    """Raised when creating a resource would violate a uniqueness constraint."""

    pass


class DomainValidationError(DomainError):
    """Raised when input is missing or malformed.

    ``errors`` optionally lists the offending fields as
    ``{"field": ..., "message": ...}`` dicts.
    """

    def __init__(self, message: str, errors: list[dict[str, str]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class AuthError(DomainError):
    """Raised when credentials or a session token cannot be verified."""

    pass


class InternalError(DomainError):
    """Raised when the store or other infrastructure fails unexpectedly."""

    pass
