"""Pydantic schemas for the delivery ledger."""

from typing import Optional

from pydantic import Field

from .base import CamelModel, UtcDatetime
from ..models.ball_by_ball import BallType


class BallCreate(CamelModel):
    """Schema for recording a delivery.

    Run bounds are checked by the delivery ledger itself so that callers
    outside the HTTP layer get the same rules.
    """

    over_number: int = Field(..., ge=0, description="0-based over number")
    striker_player_id: str = Field(..., min_length=1, description="Batter on strike")
    bowler_id: str = Field(..., min_length=1, description="Bowler")
    runs: int = Field(..., description="Runs off the delivery")
    ball_type: BallType = Field(BallType.LEGAL, description="Delivery type")
    non_striker_player_id: Optional[str] = Field(None, description="Batter at the other end")


class OverResponse(CamelModel):
    """Schema for over counters."""

    id: str
    innings_id: str
    over_number: int
    legal_balls: int
    illegal_balls: int
    runs: int


class BallResponse(CamelModel):
    """Schema for delivery response data."""

    id: str
    innings_id: str
    over_id: str
    ball_number: int
    striker_player_id: str
    non_striker_player_id: Optional[str] = None
    bowler_id: str
    runs: int
    ball_type: BallType
    is_wicket: bool
    created_at: UtcDatetime
    over: Optional[OverResponse] = None
