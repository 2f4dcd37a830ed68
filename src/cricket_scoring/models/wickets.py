"""Wicket ledger model."""

from enum import Enum

from sqlalchemy import Column, String, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship

from .base import Base


class WicketType(str, Enum):
    """Enumeration of dismissal kinds."""
    BOWLED = "BOWLED"
    CAUGHT = "CAUGHT"
    LBW = "LBW"
    RUN_OUT = "RUN_OUT"
    STUMPED = "STUMPED"
    HIT_WICKET = "HIT_WICKET"
    OBSTRUCTING_FIELD = "OBSTRUCTING_FIELD"
    HANDLED_BALL = "HANDLED_BALL"
    HIT_BALL_TWICE = "HIT_BALL_TWICE"
    TIMED_OUT = "TIMED_OUT"
    RETIRED_OUT = "RETIRED_OUT"


class Wicket(Base):
    """A dismissal, always attached to the delivery on which it fell."""

    __tablename__ = "wickets"

    innings_id = Column(String(32), ForeignKey("innings.id"), nullable=False, index=True)
    ball_id = Column(String(32), ForeignKey("balls.id"), nullable=False, unique=True)
    player_out_id = Column(String(32), ForeignKey("players.id"), nullable=False, index=True)
    bowler_id = Column(String(32), ForeignKey("players.id"), nullable=False, index=True)
    fielder_id = Column(String(32), ForeignKey("players.id"), nullable=True)
    wicket_type = Column(SQLEnum(WicketType), nullable=False)

    ball = relationship("Ball", back_populates="wicket")

    def __repr__(self) -> str:
        return f"<Wicket({self.wicket_type.value}, out={self.player_out_id})>"
