"""Pydantic schemas for per-innings player statistics."""

from typing import List

from pydantic import Field

from .base import CamelModel


class BattingStatsResponse(CamelModel):
    """Schema for a batting tally."""

    id: str
    innings_id: str
    player_id: str
    balls_faced: int
    runs: int
    fours: int
    sixes: int
    strike_rate: float


class BowlingStatsResponse(CamelModel):
    """Schema for a bowling tally."""

    id: str
    innings_id: str
    player_id: str
    balls: int
    runs: int
    wickets: int
    overs_display: str
    economy_rate: float


class InningsStatsResponse(CamelModel):
    """Batting and bowling tallies of one innings."""

    innings_id: str
    batting: List[BattingStatsResponse] = Field(default_factory=list)
    bowling: List[BowlingStatsResponse] = Field(default_factory=list)
