class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a record does not exist."""


class AuthenticationError(DomainError):
    """Raised when there is no valid signed-in session."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class IdentityError(DomainError):
    """Raised by the identity provider; carries a provider error code."""

    def __init__(self, code: str, message: str = ""):
        super().__init__(message or code)
        self.code = code
