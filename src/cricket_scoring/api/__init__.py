"""HTTP surface of the scoring service."""

from .app import create_app
from .auth import decode_token, issue_token

__all__ = ["create_app", "decode_token", "issue_token"]
