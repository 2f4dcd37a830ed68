"""Pydantic schemas for the wicket ledger."""

from typing import Optional

from pydantic import Field

from .base import CamelModel, UtcDatetime
from .ball_by_ball import BallResponse
from ..models.wickets import WicketType


class WicketCreate(CamelModel):
    """Schema for recording a wicket.

    Without ``ball_id`` a zero-run legal delivery is recorded first, in the
    same transaction, using the optional delivery fields below.
    """

    ball_id: Optional[str] = Field(None, description="Delivery the wicket fell on")
    player_out_id: str = Field(..., min_length=1, description="Dismissed batter")
    bowler_id: str = Field(..., min_length=1, description="Bowler credited")
    fielder_id: Optional[str] = Field(None, description="Catcher, stumper or thrower")
    wicket_type: WicketType = Field(..., description="Kind of dismissal")

    # Only used when the delivery is created implicitly
    over_number: Optional[int] = Field(None, ge=0)
    striker_player_id: Optional[str] = None
    non_striker_player_id: Optional[str] = None


class WicketResponse(CamelModel):
    """Schema for wicket response data."""

    id: str
    innings_id: str
    ball_id: str
    player_out_id: str
    bowler_id: str
    fielder_id: Optional[str] = None
    wicket_type: WicketType
    created_at: UtcDatetime
    ball: Optional[BallResponse] = None
