"""Extras ledger model."""

from enum import Enum

from sqlalchemy import Column, String, Integer, ForeignKey, Enum as SQLEnum

from .base import Base


class ExtraType(str, Enum):
    """Enumeration of extras."""
    WIDE = "WIDE"
    NO_BALL = "NO_BALL"
    BYE = "BYE"
    LEG_BYE = "LEG_BYE"

    @property
    def counts_as_ball(self) -> bool:
        """Byes and leg byes follow a legal delivery."""
        return self in (ExtraType.BYE, ExtraType.LEG_BYE)


class Extra(Base):
    """Runs credited to the batting side that were not scored off the bat."""

    __tablename__ = "extras"

    innings_id = Column(String(32), ForeignKey("innings.id"), nullable=False, index=True)
    extra_type = Column(SQLEnum(ExtraType), nullable=False)
    runs = Column(Integer, default=0, nullable=False)
    over_id = Column(String(32), ForeignKey("overs.id"), nullable=True, index=True)

    def __repr__(self) -> str:
        return f"<Extra({self.extra_type.value}, {self.runs})>"
