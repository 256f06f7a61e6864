class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when admin credentials are invalid or admin access is disabled."""


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""


class UnknownSubject(ValidationError):
    """Raised when a subject id does not reference a roster entry."""


class InactiveSubject(ValidationError):
    """Raised when an inactive subject tries to record attendance."""


class NoActiveSession(DomainError):
    """Raised when a break is toggled before the subject arrived today."""


class SessionAlreadyClosed(DomainError):
    """Raised when a break is toggled after the day was closed by departure."""


class RecognitionUnavailable(DomainError):
    """Raised when the recognition service is disabled or unreachable."""
