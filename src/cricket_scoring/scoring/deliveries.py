"""Delivery ledger: every ball bowled, and its reversal on correction."""

from datetime import datetime
from typing import Dict

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from .aggregates import (
    apply_batting_delta,
    apply_bowling_delta,
    apply_innings_delta,
    apply_over_delta,
    get_or_create_batting_stats,
    get_or_create_bowling_stats,
    get_or_create_over,
    next_ball_number,
    over_for_legal_delivery,
)
from .errors import ValidationError
from .innings import (
    ensure_match_open,
    ensure_open_for_recording,
    refresh_innings_status,
    resolve_non_striker,
    rotate_strike,
)
from .repository import find_wicket_for_ball
from .wickets import reverse_wicket
from ..models import Ball, BallType, BattingStats, BowlingStats, Innings, Match, Over
from ..schemas.ball_by_ball import BallCreate


MAX_RUNS_PER_LEGAL_BALL = 6


def validate_runs(ball_type: BallType, runs: int) -> None:
    if ball_type == BallType.LEGAL and not 0 <= runs <= MAX_RUNS_PER_LEGAL_BALL:
        raise ValidationError("Runs must be between 0 and 6 for legal balls")
    if runs < 0:
        raise ValidationError("Runs cannot be negative")


def batting_contribution(ball_type: BallType, runs: int) -> Dict[str, int]:
    """What a delivery adds to the striker's tally.

    Wides are not faced and their runs are not the batter's; no-balls are
    faced and runs off them are.
    """
    if ball_type == BallType.WIDE:
        return {"balls_faced": 0, "runs": 0, "fours": 0, "sixes": 0}
    return {
        "balls_faced": 1,
        "runs": runs,
        "fours": 1 if runs == 4 else 0,
        "sixes": 1 if runs == 6 else 0,
    }


def record_delivery(
    session: Session,
    match: Match,
    innings: Innings,
    data: BallCreate,
    now: datetime,
    refresh_status: bool = True,
) -> Ball:
    """Append a delivery and update over, innings and player tallies."""
    validate_runs(data.ball_type, data.runs)
    ensure_open_for_recording(match, innings)

    legal = data.ball_type == BallType.LEGAL
    if legal:
        over = over_for_legal_delivery(session, innings.id, data.over_number)
    else:
        over = get_or_create_over(session, innings.id, data.over_number)

    non_striker_id = resolve_non_striker(innings, data.striker_player_id, data.non_striker_player_id)
    ball = Ball(
        innings_id=innings.id,
        over_id=over.id,
        ball_number=next_ball_number(session, over.id),
        striker_player_id=data.striker_player_id,
        non_striker_player_id=non_striker_id,
        bowler_id=data.bowler_id,
        runs=data.runs,
        ball_type=data.ball_type,
        is_wicket=False,
        created_at=now,
        updated_at=now,
    )
    session.add(ball)

    apply_over_delta(over, legal=1 if legal else 0, illegal=0 if legal else 1, runs=data.runs)
    apply_innings_delta(innings, runs=data.runs, balls=1 if legal else 0)
    apply_batting_delta(
        get_or_create_batting_stats(session, innings.id, data.striker_player_id),
        **batting_contribution(data.ball_type, data.runs),
    )
    apply_bowling_delta(
        get_or_create_bowling_stats(session, innings.id, data.bowler_id),
        balls=1 if legal else 0,
        runs=data.runs,
    )

    ends_over = legal and over.is_complete
    rotate_strike(innings, data.striker_player_id, non_striker_id, data.runs, ends_over)

    match.updated_at = now
    session.flush()
    if refresh_status:
        refresh_innings_status(session, match, innings, now)

    logger.info(
        "Recorded ball {}.{} ({}, {} runs) in innings {} -> {}/{} ({} balls)",
        over.over_number, ball.ball_number, data.ball_type.value, data.runs, innings.id,
        innings.total_runs, innings.total_wickets, innings.total_balls,
    )
    return ball


def delete_delivery(session: Session, match: Match, innings: Innings, ball: Ball, now: datetime) -> None:
    """Remove a delivery and reverse its contribution everywhere, wicket included."""
    ensure_match_open(match)

    wicket = find_wicket_for_ball(session, ball.id)
    if wicket is not None:
        logger.info("Ball {} carries wicket {}; removing it first", ball.id, wicket.id)
        reverse_wicket(session, innings, wicket)

    legal = ball.is_legal_delivery
    over = session.get(Over, ball.over_id)
    if over is not None:
        apply_over_delta(over, legal=-1 if legal else 0, illegal=0 if legal else -1, runs=-ball.runs)
    apply_innings_delta(innings, runs=-ball.runs, balls=-1 if legal else 0)

    batting = session.execute(
        select(BattingStats).where(
            BattingStats.innings_id == innings.id, BattingStats.player_id == ball.striker_player_id
        )
    ).scalar_one_or_none()
    if batting is not None:
        contribution = batting_contribution(ball.ball_type, ball.runs)
        apply_batting_delta(batting, **{k: -v for k, v in contribution.items()})

    bowling = session.execute(
        select(BowlingStats).where(
            BowlingStats.innings_id == innings.id, BowlingStats.player_id == ball.bowler_id
        )
    ).scalar_one_or_none()
    if bowling is not None:
        apply_bowling_delta(bowling, balls=-1 if legal else 0, runs=-ball.runs)

    ball_id, runs = ball.id, ball.runs
    session.delete(ball)
    match.updated_at = now
    session.flush()
    refresh_innings_status(session, match, innings, now)

    logger.info(
        "Deleted ball {} ({} runs) from innings {} -> {}/{} ({} balls)",
        ball_id, runs, innings.id, innings.total_runs, innings.total_wickets, innings.total_balls,
    )
