"""Access predicate applied uniformly by every core operation.

The caller's identity arrives as an explicit :class:`AuthContext`, built once
at the request boundary. Nothing here reads ambient state.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import AuthenticationError, AuthorizationError
from ..models.matches import Match


class Role(str, Enum):
    """Enumeration of caller roles."""
    ADMIN = "ADMIN"
    UMPIRE = "UMPIRE"
    VIEWER = "VIEWER"


@dataclass(frozen=True)
class AuthContext:
    """Verified caller identity."""

    subject: Optional[str]
    role: Role
    authenticated: bool = True

    @classmethod
    def anonymous(cls) -> "AuthContext":
        return cls(subject=None, role=Role.VIEWER, authenticated=False)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def can_score(self) -> bool:
        return self.authenticated and self.role in (Role.UMPIRE, Role.ADMIN)

    def owns(self, match: Match) -> bool:
        return self.subject is not None and match.owner_id == self.subject


def require_authenticated(auth: AuthContext) -> None:
    if not auth.authenticated:
        raise AuthenticationError("Unauthorized")


def require_scorer(auth: AuthContext) -> None:
    """Only umpires and admins may mutate anything."""
    require_authenticated(auth)
    if not auth.can_score:
        raise AuthorizationError("Only umpires and admins can modify matches")


def require_match_writer(auth: AuthContext, match: Match) -> None:
    """Admins act on every match, umpires only on the matches they own."""
    require_scorer(auth)
    if auth.is_admin:
        return
    if not auth.owns(match):
        raise AuthorizationError("You do not have access to this match")


def owner_filter(auth: AuthContext) -> Optional[str]:
    """Owner id to restrict listings to, or None for unfiltered reads."""
    if auth.authenticated and auth.role == Role.UMPIRE:
        return auth.subject
    return None
