"""Innings lifecycle: start, persisted completion and the batters at the crease."""

from datetime import datetime
from typing import Optional

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .aggregates import get_or_create_batting_stats, get_or_create_bowling_stats
from .errors import ConflictError, ValidationError
from .repository import squad_size, team_player_ids
from ..models import Ball, Innings, InningsStatus, Match, MatchStatus, Over, BALLS_PER_OVER
from ..schemas.innings import InningsCreate


INNINGS_PER_MATCH = 2


def is_innings_complete(total_wickets: int, total_balls: int, squad: int, overs_limit: int) -> bool:
    """All out (one batter always remains) or the overs are used up.

    A squad of fewer than two players disables the all-out criterion.
    """
    all_out = squad >= 2 and total_wickets >= squad - 1
    overs_done = total_balls >= overs_limit * BALLS_PER_OVER
    return all_out or overs_done


def ensure_match_open(match: Match) -> None:
    """Scoring data of a completed match is immutable."""
    if match.is_completed:
        raise ConflictError("Match is already completed")


def ensure_open_for_recording(match: Match, innings: Innings) -> None:
    """Preconditions shared by every operation that adds to an innings."""
    ensure_match_open(match)
    if not innings.is_open:
        raise ConflictError("Innings is already completed")
    if innings.total_balls >= match.max_balls:
        raise ValidationError(
            f"Over limit reached. Maximum {match.overs_limit} overs ({match.max_balls} balls) allowed."
        )


def closing_ball_id(session: Session, innings: Innings) -> Optional[str]:
    """The delivery bowled last in the innings, by over then ball number."""
    return session.execute(
        select(Ball.id)
        .join(Over, Ball.over_id == Over.id)
        .where(Ball.innings_id == innings.id)
        .order_by(Over.over_number.desc(), Ball.ball_number.desc())
        .limit(1)
    ).scalar_one_or_none()


def ensure_open_for_wicket(session: Session, match: Match, innings: Innings, ball: Ball) -> None:
    """A wicket needs a live innings, or must fall on the ball that used up its overs.

    The second case covers a dismissal recorded after the final delivery,
    which may already have completed the match naturally. A forcefully
    ended match stays closed.
    """
    if not innings.is_open or match.is_completed:
        if not _wicket_on_closing_ball(session, match, innings, ball):
            ensure_match_open(match)
            raise ConflictError("Innings is already completed")

    squad = squad_size(session, innings.team_id)
    if squad >= 2 and innings.total_wickets >= squad - 1:
        raise ConflictError("All batters of this innings are already out")


def _wicket_on_closing_ball(session: Session, match: Match, innings: Innings, ball: Ball) -> bool:
    if innings.total_balls < match.max_balls:
        return False
    if match.is_completed and (match.ended_at is not None or innings.innings_number < INNINGS_PER_MATCH):
        return False
    return ball.id == closing_ball_id(session, innings)


def start_innings(session: Session, match: Match, data: InningsCreate, now: datetime) -> Innings:
    """Open an innings for the batting side and seed its statistics rows."""
    ensure_match_open(match)

    if data.team_id not in (match.team_a_id, match.team_b_id):
        raise ValidationError("Team is not playing in this match")

    existing = list(
        session.execute(
            select(Innings).where(Innings.match_id == match.id).order_by(Innings.innings_number)
        ).scalars()
    )
    number = data.innings_number
    if number is None:
        number = (max((inn.innings_number for inn in existing), default=0)) + 1
    if number > INNINGS_PER_MATCH:
        raise ConflictError("Both innings have already been started")
    if number < 1:
        raise ValidationError("Innings number must be 1 or 2")
    if any(inn.innings_number == number for inn in existing):
        raise ConflictError("Innings already exists for this match")
    if any(inn.team_id == data.team_id for inn in existing):
        raise ValidationError("This team has already batted")

    # Starting the next innings closes any earlier one still open
    for inn in existing:
        if inn.status == InningsStatus.ONGOING:
            inn.status = InningsStatus.COMPLETED
            inn.completed_at = now
            logger.info("Closed innings {} of match {} before starting innings {}", inn.innings_number, match.id, number)

    if match.status != MatchStatus.ONGOING:
        match.status = MatchStatus.ONGOING
    match.updated_at = now

    innings = Innings(
        match_id=match.id,
        team_id=data.team_id,
        innings_number=number,
        opening_batsman_id=data.opening_batsman_id,
        opening_bowler_id=data.opening_bowler_id,
        status=InningsStatus.ONGOING,
        total_runs=0,
        total_wickets=0,
        total_balls=0,
        current_striker_id=data.opening_batsman_id,
        current_non_striker_id=None,
        created_at=now,
        updated_at=now,
    )
    session.add(innings)
    session.flush()

    # Zeroed tallies for every batter; players that already have a row are skipped
    seeded = 0
    for player_id in dict.fromkeys(team_player_ids(session, data.team_id) + [data.opening_batsman_id]):
        get_or_create_batting_stats(session, innings.id, player_id)
        seeded += 1
    get_or_create_bowling_stats(session, innings.id, data.opening_bowler_id)

    logger.info(
        "Started innings {} of match {} for team {} ({} batting rows seeded)",
        number, match.id, data.team_id, seeded,
    )
    return innings


def _is_latest_innings(session: Session, innings: Innings) -> bool:
    latest = session.execute(
        select(func.max(Innings.innings_number)).where(Innings.match_id == innings.match_id)
    ).scalar_one()
    return latest == innings.innings_number


def refresh_innings_status(session: Session, match: Match, innings: Innings, now: datetime) -> None:
    """Persist the completion predicate in the same transaction that crossed it.

    Crossing it closes the innings (and, for the final innings, completes the
    match naturally). A correction that falls back below it reopens the
    innings, provided it is still the latest one and the match is live.
    """
    squad = squad_size(session, innings.team_id)
    done = is_innings_complete(innings.total_wickets, innings.total_balls, squad, match.overs_limit)

    if done and innings.status == InningsStatus.ONGOING:
        innings.status = InningsStatus.COMPLETED
        innings.completed_at = now
        logger.info(
            "Innings {} of match {} complete at {}/{} in {} overs",
            innings.innings_number, match.id, innings.total_runs, innings.total_wickets, innings.overs_display,
        )
        if innings.innings_number >= INNINGS_PER_MATCH and match.status != MatchStatus.COMPLETED:
            match.status = MatchStatus.COMPLETED
            match.updated_at = now
            logger.info("Match {} completed naturally", match.id)
    elif not done and innings.status == InningsStatus.COMPLETED:
        if match.status == MatchStatus.COMPLETED or not _is_latest_innings(session, innings):
            return
        innings.status = InningsStatus.ONGOING
        innings.completed_at = None
        logger.warning("Reopened innings {} of match {} after a correction", innings.innings_number, match.id)


def resolve_non_striker(innings: Innings, striker_id: str, non_striker_id: Optional[str]) -> Optional[str]:
    """The other batter: as given, else whoever is at the crease besides the striker."""
    if non_striker_id:
        return non_striker_id
    for candidate in (innings.current_non_striker_id, innings.current_striker_id):
        if candidate and candidate != striker_id:
            return candidate
    return None


def rotate_strike(
    innings: Innings,
    striker_id: str,
    non_striker_id: Optional[str],
    runs: int,
    ends_over: bool,
) -> None:
    """Odd runs swap ends; the end of an over swaps them again."""
    striker, non_striker = striker_id, non_striker_id
    if runs % 2 == 1:
        striker, non_striker = non_striker, striker
    if ends_over:
        striker, non_striker = non_striker, striker
    innings.current_striker_id = striker
    innings.current_non_striker_id = non_striker
