"""Match model for the scoring database."""

from enum import Enum

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship

from .base import Base
from .overs import BALLS_PER_OVER


class MatchStatus(str, Enum):
    """Enumeration of match lifecycle states."""
    UPCOMING = "UPCOMING"
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"


class TossDecision(str, Enum):
    """What the toss winner chose to do."""
    BAT = "BAT"
    BOWL = "BOWL"


class Match(Base):
    """Match model; status is advanced only by the match state machine."""

    __tablename__ = "matches"

    name = Column(String(200), nullable=False)
    team_a_id = Column(String(32), ForeignKey("teams.id"), nullable=False, index=True)
    team_b_id = Column(String(32), ForeignKey("teams.id"), nullable=False, index=True)
    owner_id = Column(String(64), nullable=False, index=True)  # umpire

    toss_winner_id = Column(String(32), ForeignKey("teams.id"), nullable=True)
    toss_decision = Column(SQLEnum(TossDecision), nullable=True)
    overs_limit = Column(Integer, nullable=False, default=20)

    status = Column(SQLEnum(MatchStatus), nullable=False, default=MatchStatus.UPCOMING, index=True)

    # Forceful ending, cleared again by undo
    ended_by = Column(String(20), nullable=True)
    end_comment = Column(Text, nullable=True)
    ended_at = Column(DateTime(timezone=True), nullable=True)

    team_a = relationship("Team", foreign_keys=[team_a_id])
    team_b = relationship("Team", foreign_keys=[team_b_id])
    innings = relationship("Innings", back_populates="match", order_by="Innings.innings_number")

    __table_args__ = (
        Index("idx_match_owner_status", "owner_id", "status"),
    )

    @property
    def is_completed(self) -> bool:
        """Check if match is completed."""
        return self.status == MatchStatus.COMPLETED

    @property
    def max_balls(self) -> int:
        return self.overs_limit * BALLS_PER_OVER

    def __repr__(self) -> str:
        return f"<Match('{self.name}', {self.status.value if self.status else 'NEW'})>"
