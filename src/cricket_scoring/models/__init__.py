"""Database models for the cricket scoring service."""

from .base import Base
from .teams import Team
from .players import Player, PlayerRole
from .matches import Match, MatchStatus, TossDecision
from .overs import Over, BALLS_PER_OVER
from .innings import Innings, InningsStatus
from .ball_by_ball import Ball, BallType
from .extras import Extra, ExtraType
from .wickets import Wicket, WicketType
from .player_stats import BattingStats, BowlingStats

__all__ = [
    "Base",
    "Team",
    "Player",
    "PlayerRole",
    "Match",
    "MatchStatus",
    "TossDecision",
    "Over",
    "BALLS_PER_OVER",
    "Innings",
    "InningsStatus",
    "Ball",
    "BallType",
    "Extra",
    "ExtraType",
    "Wicket",
    "WicketType",
    "BattingStats",
    "BowlingStats",
]
