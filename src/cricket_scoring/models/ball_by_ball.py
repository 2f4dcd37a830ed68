"""Delivery ledger model."""

from enum import Enum

from sqlalchemy import Column, String, Integer, Boolean, ForeignKey, Index, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship

from .base import Base


class BallType(str, Enum):
    """Enumeration of delivery types."""
    LEGAL = "LEGAL"
    WIDE = "WIDE"
    NO_BALL = "NO_BALL"


class Ball(Base):
    """A single delivery. Immutable once created except for ``is_wicket``."""

    __tablename__ = "balls"

    innings_id = Column(String(32), ForeignKey("innings.id"), nullable=False, index=True)
    over_id = Column(String(32), ForeignKey("overs.id"), nullable=False, index=True)
    ball_number = Column(Integer, nullable=False)  # 1-based within its over

    # Players involved
    striker_player_id = Column(String(32), ForeignKey("players.id"), nullable=False, index=True)
    non_striker_player_id = Column(String(32), ForeignKey("players.id"), nullable=True)
    bowler_id = Column(String(32), ForeignKey("players.id"), nullable=False, index=True)

    # Ball outcome
    runs = Column(Integer, default=0, nullable=False)
    ball_type = Column(SQLEnum(BallType), nullable=False, default=BallType.LEGAL)
    is_wicket = Column(Boolean, default=False, nullable=False)

    over = relationship("Over", back_populates="balls")
    wicket = relationship("Wicket", back_populates="ball", uselist=False)

    __table_args__ = (
        UniqueConstraint("over_id", "ball_number", name="uq_ball_over_number"),
        Index("idx_ball_innings_over", "innings_id", "over_id", "ball_number"),
    )

    @property
    def is_legal_delivery(self) -> bool:
        """Check if this delivery counts toward the over."""
        return self.ball_type == BallType.LEGAL

    @property
    def is_four(self) -> bool:
        return self.runs == 4

    @property
    def is_six(self) -> bool:
        return self.runs == 6

    def __repr__(self) -> str:
        return f"<Ball(#{self.ball_number}, {self.runs} runs{', W' if self.is_wicket else ''})>"
