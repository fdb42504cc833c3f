class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is missing or malformed."""

    kind = "validation_error"


class AuthenticationError(DomainError):
    """Raised when a request carries no signed-in identity."""

    kind = "authentication_error"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = "authorization_error"


class ConflictError(DomainError):
    """Raised when an operation would break a state invariant."""

    kind = "conflict"


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    kind = "not_found"
