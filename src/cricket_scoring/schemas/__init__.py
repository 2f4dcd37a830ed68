"""Pydantic schemas for data validation."""

from .base import CamelModel, MessageResponse
from .teams import TeamCreate, PlayerCreate, TeamResponse, PlayerResponse
from .matches import (
    MatchCreate,
    MatchStatusUpdate,
    EndMatchRequest,
    MatchResponse,
    MatchResult,
    MatchStateResponse,
    MatchTransitionResponse,
)
from .innings import InningsCreate, InningsResponse, InningsDetail
from .ball_by_ball import BallCreate, BallResponse, OverResponse
from .extras import ExtraCreate, ExtraResponse
from .wickets import WicketCreate, WicketResponse
from .player_stats import BattingStatsResponse, BowlingStatsResponse, InningsStatsResponse

__all__ = [
    "CamelModel",
    "MessageResponse",
    "TeamCreate",
    "PlayerCreate",
    "TeamResponse",
    "PlayerResponse",
    "MatchCreate",
    "MatchStatusUpdate",
    "EndMatchRequest",
    "MatchResponse",
    "MatchResult",
    "MatchStateResponse",
    "MatchTransitionResponse",
    "InningsCreate",
    "InningsResponse",
    "InningsDetail",
    "BallCreate",
    "BallResponse",
    "OverResponse",
    "ExtraCreate",
    "ExtraResponse",
    "WicketCreate",
    "WicketResponse",
    "BattingStatsResponse",
    "BowlingStatsResponse",
    "InningsStatsResponse",
]
