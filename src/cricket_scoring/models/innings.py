"""Innings model for the scoring database."""

from enum import Enum

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Index, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship

from .base import Base
from .overs import BALLS_PER_OVER


class InningsStatus(str, Enum):
    """Enumeration of innings statuses."""
    ONGOING = "ONGOING"
    COMPLETED = "COMPLETED"


class Innings(Base):
    """One side's batting turn; totals are maintained incrementally at write time."""

    __tablename__ = "innings"

    match_id = Column(String(32), ForeignKey("matches.id"), nullable=False, index=True)
    team_id = Column(String(32), ForeignKey("teams.id"), nullable=False, index=True)  # batting side
    innings_number = Column(Integer, nullable=False)  # 1 or 2

    opening_batsman_id = Column(String(32), ForeignKey("players.id"), nullable=False)
    opening_bowler_id = Column(String(32), ForeignKey("players.id"), nullable=False)

    status = Column(SQLEnum(InningsStatus), nullable=False, default=InningsStatus.ONGOING, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    # Score information
    total_runs = Column(Integer, default=0, nullable=False)
    total_wickets = Column(Integer, default=0, nullable=False)
    total_balls = Column(Integer, default=0, nullable=False)

    # Batters at the crease after the last delivery
    current_striker_id = Column(String(32), ForeignKey("players.id"), nullable=True)
    current_non_striker_id = Column(String(32), ForeignKey("players.id"), nullable=True)

    match = relationship("Match", back_populates="innings")
    overs = relationship("Over", back_populates="innings", order_by="Over.over_number")

    __table_args__ = (
        UniqueConstraint("match_id", "innings_number", name="uq_innings_match_number"),
        Index("idx_innings_match_status", "match_id", "status"),
    )

    @property
    def is_open(self) -> bool:
        return self.status == InningsStatus.ONGOING

    @property
    def completed_overs(self) -> int:
        return self.total_balls // BALLS_PER_OVER

    @property
    def overs_display(self) -> str:
        """Overs in scorebook notation (e.g. '12.3' for 12 overs and 3 balls)."""
        return f"{self.total_balls // BALLS_PER_OVER}.{self.total_balls % BALLS_PER_OVER}"

    @property
    def overs_decimal(self) -> float:
        """Get overs as a true fraction (12.3 in the book is 12.5 here)."""
        return self.total_balls / BALLS_PER_OVER

    @property
    def run_rate(self) -> float:
        """Calculate run rate."""
        if self.total_balls == 0:
            return 0.0
        return round(self.total_runs / self.overs_decimal, 2)

    def __repr__(self) -> str:
        return f"<Innings({self.innings_number}, {self.total_runs}/{self.total_wickets} in {self.overs_display})>"
