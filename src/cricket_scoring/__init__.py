"""Cricket Scoring - ball-by-ball innings scoring service."""

from .config import settings
from .database import get_database_engine, session_scope

__all__ = ["settings", "get_database_engine", "session_scope"]
