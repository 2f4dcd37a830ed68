"""Pydantic schemas for roster data."""

from typing import List, Optional

from pydantic import Field

from .base import CamelModel
from ..models.players import PlayerRole


class PlayerCreate(CamelModel):
    """Schema for registering a player on a team."""

    name: str = Field(..., min_length=1, max_length=100, description="Player name")
    jersey_number: Optional[int] = Field(None, ge=0, le=999, description="Jersey number")
    role: PlayerRole = Field(PlayerRole.BATSMAN, description="Playing role")


class TeamCreate(CamelModel):
    """Schema for registering a team with its squad."""

    name: str = Field(..., min_length=1, max_length=100, description="Team name")
    short_name: Optional[str] = Field(None, max_length=10, description="Abbreviation")
    owner_id: Optional[str] = Field(None, description="Umpire who owns the team")
    players: List[PlayerCreate] = Field(default_factory=list)


class PlayerResponse(CamelModel):
    """Schema for player response data."""

    id: str
    name: str
    team_id: str
    jersey_number: Optional[int] = None
    role: PlayerRole


class TeamResponse(CamelModel):
    """Schema for team response data."""

    id: str
    name: str
    short_name: Optional[str] = None
    owner_id: Optional[str] = None
    players: List[PlayerResponse] = Field(default_factory=list)
