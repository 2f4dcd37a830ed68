"""Player model for the roster."""

from enum import Enum

from sqlalchemy import Column, String, Integer, ForeignKey, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship

from .base import Base


class PlayerRole(str, Enum):
    """Enumeration of player roles."""
    BATSMAN = "BATSMAN"
    BOWLER = "BOWLER"
    ALL_ROUNDER = "ALL_ROUNDER"
    WICKET_KEEPER = "WICKET_KEEPER"


class Player(Base):
    """Player model; the scoring core references players but never mutates them."""

    __tablename__ = "players"

    name = Column(String(100), nullable=False, index=True)
    team_id = Column(String(32), ForeignKey("teams.id"), nullable=False, index=True)
    jersey_number = Column(Integer, nullable=True)
    role = Column(SQLEnum(PlayerRole), nullable=False, default=PlayerRole.BATSMAN)

    team = relationship("Team", back_populates="players")

    __table_args__ = (
        Index("idx_player_team_jersey", "team_id", "jersey_number"),
    )

    def __repr__(self) -> str:
        return f"<Player(name='{self.name}', jersey={self.jersey_number})>"
