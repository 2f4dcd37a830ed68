"""Error taxonomy of the scoring core.

Every error carries the HTTP status it maps to; the message is safe to show
to users and never contains internal detail.
"""


class ScoringError(Exception):
    """Base class for all scoring failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ScoringError):
    """Missing or out-of-range input."""

    status_code = 400


class AuthenticationError(ScoringError):
    """Missing or invalid credentials on a mutating call."""

    status_code = 401


class AuthorizationError(ScoringError):
    """Role or ownership mismatch."""

    status_code = 403


ForbiddenError = AuthorizationError


class NotFoundError(ScoringError):
    """Unknown match, innings, delivery, extra or wicket."""

    status_code = 404


class ConflictError(ScoringError):
    """The operation clashes with current state (duplicates, expired windows, completed matches)."""

    status_code = 409


class InternalError(ScoringError):
    """Store failure."""

    status_code = 500
