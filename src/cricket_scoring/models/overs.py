"""Over model for the scoring database."""

from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base


BALLS_PER_OVER = 6


class Over(Base):
    """Per-over counters, created lazily on the first delivery of the over."""

    __tablename__ = "overs"

    innings_id = Column(String(32), ForeignKey("innings.id"), nullable=False, index=True)
    over_number = Column(Integer, nullable=False)  # 0-based

    legal_balls = Column(Integer, default=0, nullable=False)
    illegal_balls = Column(Integer, default=0, nullable=False)
    runs = Column(Integer, default=0, nullable=False)

    innings = relationship("Innings", back_populates="overs")
    balls = relationship("Ball", back_populates="over", order_by="Ball.ball_number")

    __table_args__ = (
        UniqueConstraint("innings_id", "over_number", name="uq_over_innings_number"),
    )

    @property
    def is_complete(self) -> bool:
        return self.legal_balls >= BALLS_PER_OVER

    def __repr__(self) -> str:
        return f"<Over({self.over_number}, {self.legal_balls} legal, {self.runs} runs)>"
