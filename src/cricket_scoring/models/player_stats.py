"""Per-innings player statistics models."""

from sqlalchemy import Column, String, Integer, ForeignKey, UniqueConstraint

from .base import Base
from .overs import BALLS_PER_OVER


class BattingStats(Base):
    """Running batting tally for one player in one innings."""

    __tablename__ = "batting_stats"

    innings_id = Column(String(32), ForeignKey("innings.id"), nullable=False, index=True)
    player_id = Column(String(32), ForeignKey("players.id"), nullable=False, index=True)

    balls_faced = Column(Integer, default=0, nullable=False)
    runs = Column(Integer, default=0, nullable=False)
    fours = Column(Integer, default=0, nullable=False)
    sixes = Column(Integer, default=0, nullable=False)

    __table_args__ = (
        UniqueConstraint("innings_id", "player_id", name="uq_batting_innings_player"),
    )

    @property
    def strike_rate(self) -> float:
        if self.balls_faced == 0:
            return 0.0
        return round(self.runs * 100.0 / self.balls_faced, 2)

    def __repr__(self) -> str:
        return f"<BattingStats(player={self.player_id}, {self.runs} ({self.balls_faced}))>"


class BowlingStats(Base):
    """Running bowling tally for one player in one innings."""

    __tablename__ = "bowling_stats"

    innings_id = Column(String(32), ForeignKey("innings.id"), nullable=False, index=True)
    player_id = Column(String(32), ForeignKey("players.id"), nullable=False, index=True)

    balls = Column(Integer, default=0, nullable=False)
    runs = Column(Integer, default=0, nullable=False)
    wickets = Column(Integer, default=0, nullable=False)

    __table_args__ = (
        UniqueConstraint("innings_id", "player_id", name="uq_bowling_innings_player"),
    )

    @property
    def overs_display(self) -> str:
        return f"{self.balls // BALLS_PER_OVER}.{self.balls % BALLS_PER_OVER}"

    @property
    def economy_rate(self) -> float:
        if self.balls == 0:
            return 0.0
        return round(self.runs * BALLS_PER_OVER / self.balls, 2)

    def __repr__(self) -> str:
        return f"<BowlingStats(player={self.player_id}, {self.wickets}/{self.runs})>"
