"""Pydantic schemas for innings data."""

from typing import List, Optional

from pydantic import Field, field_validator

from .base import CamelModel, UtcDatetime
from .ball_by_ball import BallResponse, OverResponse
from .extras import ExtraResponse
from .wickets import WicketResponse
from .player_stats import BattingStatsResponse, BowlingStatsResponse
from ..models.innings import InningsStatus


class InningsCreate(CamelModel):
    """Schema for starting an innings."""

    team_id: str = Field(..., min_length=1, description="Batting team ID")
    innings_number: Optional[int] = Field(None, description="1 or 2; defaults to the next one")
    opening_batsman_id: str = Field(..., min_length=1, description="Opening batter on strike")
    opening_bowler_id: str = Field(..., min_length=1, description="Opening bowler")

    @field_validator("innings_number")
    @classmethod
    def validate_innings_number(cls, v):
        """Validate innings number."""
        if v is not None and v not in (1, 2):
            raise ValueError("Innings number must be 1 or 2")
        return v


class InningsResponse(CamelModel):
    """Schema for innings response data."""

    id: str
    match_id: str
    team_id: str
    innings_number: int
    opening_batsman_id: str
    opening_bowler_id: str
    status: InningsStatus
    total_runs: int
    total_wickets: int
    total_balls: int
    current_striker_id: Optional[str] = None
    current_non_striker_id: Optional[str] = None
    overs_display: str = Field(..., description="Overs in scorebook notation")
    run_rate: float = Field(..., description="Run rate")
    completed_at: Optional[UtcDatetime] = None
    created_at: UtcDatetime
    updated_at: UtcDatetime


class InningsDetail(InningsResponse):
    """Innings with every ledger entry and tally, as served to scoreboards."""

    extras_total: int = 0
    overs: List[OverResponse] = Field(default_factory=list)
    balls: List[BallResponse] = Field(default_factory=list)
    extras: List[ExtraResponse] = Field(default_factory=list)
    wickets: List[WicketResponse] = Field(default_factory=list)
    batting_stats: List[BattingStatsResponse] = Field(default_factory=list)
    bowling_stats: List[BowlingStatsResponse] = Field(default_factory=list)
