"""Access predicate and bearer tokens."""

import jwt
import pytest

from cricket_scoring.api.auth import decode_token, issue_token
from cricket_scoring.config import settings
from cricket_scoring.scoring import AuthContext, AuthenticationError, AuthorizationError, Role
from cricket_scoring.scoring.access import owner_filter, require_match_writer, require_scorer


class _Match:
    def __init__(self, owner_id):
        self.owner_id = owner_id


def test_anonymous_cannot_score():
    with pytest.raises(AuthenticationError):
        require_scorer(AuthContext.anonymous())


def test_viewer_cannot_score():
    with pytest.raises(AuthorizationError, match="Only umpires and admins"):
        require_scorer(AuthContext(subject="v", role=Role.VIEWER))


def test_umpire_writes_only_own_matches():
    umpire = AuthContext(subject="u1", role=Role.UMPIRE)
    require_match_writer(umpire, _Match("u1"))
    with pytest.raises(AuthorizationError, match="do not have access"):
        require_match_writer(umpire, _Match("u2"))


def test_admin_writes_every_match():
    require_match_writer(AuthContext(subject="admin", role=Role.ADMIN), _Match("u2"))


def test_owner_filter():
    assert owner_filter(AuthContext(subject="u1", role=Role.UMPIRE)) == "u1"
    assert owner_filter(AuthContext(subject="a", role=Role.ADMIN)) is None
    assert owner_filter(AuthContext.anonymous()) is None


def test_token_round_trip():
    auth = decode_token(issue_token("u1", Role.UMPIRE))
    assert auth == AuthContext(subject="u1", role=Role.UMPIRE)


def test_expired_token_is_anonymous():
    auth = decode_token(issue_token("u1", Role.UMPIRE, ttl_hours=-1))
    assert auth.authenticated is False
    assert auth.role == Role.VIEWER


def test_token_signed_with_other_secret_is_anonymous():
    assert decode_token(issue_token("u1", Role.ADMIN, secret="a-different-signing-secret-of-sufficient-length")).authenticated is False


def test_unknown_role_is_anonymous():
    token = jwt.encode({"userId": "u1", "role": "SUPERUSER"}, settings.auth.jwt_secret, algorithm="HS256")
    assert decode_token(token).authenticated is False


def test_missing_token_is_anonymous():
    assert decode_token(None) == AuthContext.anonymous()
