"""Over, innings and player-statistics aggregators.

Aggregates are maintained incrementally at write time and served as-is; the
helpers here are only ever called from inside a ledger transaction. Counters
never go below zero: a decrement that would do so is clamped and logged,
because it means the aggregate has drifted from its ledger.
"""

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models import Ball, BattingStats, BowlingStats, Innings, Over


def _bump(row, field: str, delta: int) -> None:
    current = getattr(row, field) or 0
    updated = current + delta
    if updated < 0:
        logger.warning(
            "Clamping {}.{} at zero (was {}, delta {}) for id={}",
            type(row).__name__, field, current, delta, row.id,
        )
        updated = 0
    setattr(row, field, updated)


# Over aggregator

def get_or_create_over(session: Session, innings_id: str, over_number: int) -> Over:
    """Fetch the over for (innings, number), creating it with zero counters."""
    over = session.execute(
        select(Over).where(Over.innings_id == innings_id, Over.over_number == over_number)
    ).scalar_one_or_none()
    if over is None:
        over = Over(innings_id=innings_id, over_number=over_number, legal_balls=0, illegal_balls=0, runs=0)
        session.add(over)
        session.flush()
        logger.debug("Opened over {} of innings {}", over_number, innings_id)
    return over


def over_for_legal_delivery(session: Session, innings_id: str, over_number: int) -> Over:
    """Over that will take the next legal ball, rolling past overs that are full."""
    over = get_or_create_over(session, innings_id, over_number)
    while over.is_complete:
        logger.warning(
            "Over {} of innings {} already has {} legal balls; moving to over {}",
            over.over_number, innings_id, over.legal_balls, over.over_number + 1,
        )
        over = get_or_create_over(session, innings_id, over.over_number + 1)
    return over


def next_ball_number(session: Session, over_id: str) -> int:
    """1-based position of the next delivery in the over."""
    highest = session.execute(
        select(func.max(Ball.ball_number)).where(Ball.over_id == over_id)
    ).scalar_one()
    return (highest or 0) + 1


def apply_over_delta(over: Over, legal: int = 0, illegal: int = 0, runs: int = 0) -> None:
    _bump(over, "legal_balls", legal)
    _bump(over, "illegal_balls", illegal)
    _bump(over, "runs", runs)


# Innings aggregator

def apply_innings_delta(innings: Innings, runs: int = 0, balls: int = 0, wickets: int = 0) -> None:
    _bump(innings, "total_runs", runs)
    _bump(innings, "total_balls", balls)
    _bump(innings, "total_wickets", wickets)


# Player statistics aggregator

def get_or_create_batting_stats(session: Session, innings_id: str, player_id: str) -> BattingStats:
    stats = session.execute(
        select(BattingStats).where(
            BattingStats.innings_id == innings_id, BattingStats.player_id == player_id
        )
    ).scalar_one_or_none()
    if stats is None:
        stats = BattingStats(innings_id=innings_id, player_id=player_id, balls_faced=0, runs=0, fours=0, sixes=0)
        session.add(stats)
        session.flush()
    return stats


def get_or_create_bowling_stats(session: Session, innings_id: str, player_id: str) -> BowlingStats:
    stats = session.execute(
        select(BowlingStats).where(
            BowlingStats.innings_id == innings_id, BowlingStats.player_id == player_id
        )
    ).scalar_one_or_none()
    if stats is None:
        stats = BowlingStats(innings_id=innings_id, player_id=player_id, balls=0, runs=0, wickets=0)
        session.add(stats)
        session.flush()
    return stats


def apply_batting_delta(
    stats: BattingStats, balls_faced: int = 0, runs: int = 0, fours: int = 0, sixes: int = 0
) -> None:
    _bump(stats, "balls_faced", balls_faced)
    _bump(stats, "runs", runs)
    _bump(stats, "fours", fours)
    _bump(stats, "sixes", sixes)


def apply_bowling_delta(stats: BowlingStats, balls: int = 0, runs: int = 0, wickets: int = 0) -> None:
    _bump(stats, "balls", balls)
    _bump(stats, "runs", runs)
    _bump(stats, "wickets", wickets)
