"""FastAPI dependencies shared by every route."""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .auth import decode_token
from ..scoring import AuthContext, ScoringService

bearer_scheme = HTTPBearer(auto_error=False)


def get_service(request: Request) -> ScoringService:
    return request.app.state.service


def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthContext:
    """Caller identity built once at the request boundary."""
    if credentials is None:
        return AuthContext.anonymous()
    return decode_token(credentials.credentials)
