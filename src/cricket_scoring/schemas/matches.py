"""Pydantic schemas for match data."""

from typing import List, Optional

from pydantic import Field, model_validator

from .base import CamelModel, UtcDatetime
from .innings import InningsDetail
from .teams import TeamResponse
from ..models.matches import MatchStatus, TossDecision


class MatchCreate(CamelModel):
    """Schema for creating a new match."""

    name: Optional[str] = Field(None, max_length=200, description="Defaults to '<A> vs <B>'")
    team_a_id: str = Field(..., min_length=1, description="First team ID")
    team_b_id: str = Field(..., min_length=1, description="Second team ID")
    toss_winner_id: Optional[str] = Field(None, description="Toss winner team ID")
    toss_decision: Optional[TossDecision] = Field(None, description="Toss decision")
    overs_limit: Optional[int] = Field(None, gt=0, description="Overs per innings")

    @model_validator(mode="after")
    def validate_teams(self):
        """Validate that the two teams differ and the toss went to one of them."""
        if self.team_a_id == self.team_b_id:
            raise ValueError("Teams must be different")
        if self.toss_winner_id and self.toss_winner_id not in (self.team_a_id, self.team_b_id):
            raise ValueError("Toss winner must be one of the match teams")
        return self


class MatchStatusUpdate(CamelModel):
    """Schema for a direct status change."""

    status: MatchStatus


class EndMatchRequest(CamelModel):
    """Schema for forcefully ending a match."""

    comment: Optional[str] = Field(None, max_length=2000)


class MatchResponse(CamelModel):
    """Schema for match response data."""

    id: str
    name: str
    team_a_id: str
    team_b_id: str
    owner_id: str
    toss_winner_id: Optional[str] = None
    toss_decision: Optional[TossDecision] = None
    overs_limit: int
    status: MatchStatus
    ended_by: Optional[str] = None
    end_comment: Optional[str] = None
    ended_at: Optional[UtcDatetime] = None
    created_at: UtcDatetime
    updated_at: UtcDatetime


class MatchResult(CamelModel):
    """Result derived from the two innings totals."""

    text: str
    winner_team_id: Optional[str] = None
    margin: int = 0
    team_a_runs: int
    team_b_runs: int


class MatchStateResponse(MatchResponse):
    """Full match state served to polling scoreboards."""

    team_a: Optional[TeamResponse] = None
    team_b: Optional[TeamResponse] = None
    innings: List[InningsDetail] = Field(default_factory=list)
    result: Optional[MatchResult] = None
    undo_seconds_remaining: int = 0


class MatchTransitionResponse(CamelModel):
    """Acknowledgement of a forceful end or an undo."""

    message: str
    match: MatchResponse
