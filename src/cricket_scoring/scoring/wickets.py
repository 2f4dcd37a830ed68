"""Wicket ledger: dismissals, each attached to the delivery it fell on."""

from datetime import datetime

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from .aggregates import apply_bowling_delta, apply_innings_delta, get_or_create_bowling_stats
from .errors import ConflictError, ValidationError
from .innings import ensure_match_open, ensure_open_for_wicket, refresh_innings_status
from .repository import find_wicket_for_ball, get_ball
from ..models import Ball, BowlingStats, Innings, Match, Wicket
from ..schemas.wickets import WicketCreate


def record_wicket(
    session: Session,
    match: Match,
    innings: Innings,
    data: WicketCreate,
    now: datetime,
) -> Wicket:
    """Record a dismissal on an existing delivery of this innings.

    The delivery that used up the overs still takes a wicket after it closed
    the innings, or the match.
    """
    if not data.ball_id:
        raise ValidationError("Ball ID is required")
    ball = get_ball(session, innings.id, data.ball_id)
    ensure_open_for_wicket(session, match, innings, ball)
    if ball.is_wicket or find_wicket_for_ball(session, ball.id) is not None:
        raise ConflictError("A wicket has already been recorded on this ball")

    wicket = Wicket(
        innings_id=innings.id,
        ball_id=ball.id,
        player_out_id=data.player_out_id,
        bowler_id=data.bowler_id,
        fielder_id=data.fielder_id,
        wicket_type=data.wicket_type,
        created_at=now,
        updated_at=now,
    )
    session.add(wicket)

    ball.is_wicket = True
    apply_innings_delta(innings, wickets=1)
    apply_bowling_delta(get_or_create_bowling_stats(session, innings.id, data.bowler_id), wickets=1)

    # The dismissed batter leaves the crease; the next delivery names the new one
    if innings.current_striker_id == data.player_out_id:
        innings.current_striker_id = None
    elif innings.current_non_striker_id == data.player_out_id:
        innings.current_non_striker_id = None

    match.updated_at = now
    session.flush()
    refresh_innings_status(session, match, innings, now)

    logger.info(
        "Wicket {} ({}) on ball {} of innings {}: {} out, bowler {}",
        wicket.id, data.wicket_type.value, ball.id, innings.id, data.player_out_id, data.bowler_id,
    )
    return wicket


def reverse_wicket(session: Session, innings: Innings, wicket: Wicket) -> None:
    """Remove a wicket and everything it contributed."""
    ball = session.get(Ball, wicket.ball_id)
    if ball is not None:
        ball.is_wicket = False

    apply_innings_delta(innings, wickets=-1)

    stats = session.execute(
        select(BowlingStats).where(
            BowlingStats.innings_id == innings.id, BowlingStats.player_id == wicket.bowler_id
        )
    ).scalar_one_or_none()
    if stats is not None:
        apply_bowling_delta(stats, wickets=-1)

    session.delete(wicket)
    session.flush()


def delete_wicket(session: Session, match: Match, innings: Innings, wicket: Wicket, now: datetime) -> None:
    ensure_match_open(match)
    wicket_id, ball_id = wicket.id, wicket.ball_id
    reverse_wicket(session, innings, wicket)
    match.updated_at = now
    refresh_innings_status(session, match, innings, now)
    logger.info("Deleted wicket {} (ball {}) from innings {}", wicket_id, ball_id, innings.id)
