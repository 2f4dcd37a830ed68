"""Ball-by-ball scoring core: ledgers, aggregators and the match state machine."""

from .access import AuthContext, Role
from .errors import (
    ScoringError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ForbiddenError,
    NotFoundError,
    ConflictError,
    InternalError,
)
from .locks import KeyedLockRegistry
from .service import ScoringService

__all__ = [
    "AuthContext",
    "Role",
    "ScoringError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
    "KeyedLockRegistry",
    "ScoringService",
]
