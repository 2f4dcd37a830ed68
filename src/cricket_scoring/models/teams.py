"""Team model for the roster."""

from sqlalchemy import Column, String, Index
from sqlalchemy.orm import relationship

from .base import Base


class Team(Base):
    """Team model representing a side that can bat or bowl in a match."""

    __tablename__ = "teams"

    name = Column(String(100), nullable=False, index=True)
    short_name = Column(String(10), nullable=True)
    owner_id = Column(String(64), nullable=True, index=True)  # umpire who registered the team

    players = relationship("Player", back_populates="team", order_by="Player.jersey_number")

    __table_args__ = (
        Index("idx_team_owner_name", "owner_id", "name"),
    )

    def __repr__(self) -> str:
        return f"<Team(name='{self.name}')>"
