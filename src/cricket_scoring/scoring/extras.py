"""Extras ledger: wides, no-balls, byes and leg byes."""

from datetime import datetime

from loguru import logger
from sqlalchemy.orm import Session

from .aggregates import apply_innings_delta, apply_over_delta, over_for_legal_delivery
from .errors import ValidationError
from .innings import ensure_match_open, ensure_open_for_recording, refresh_innings_status
from .repository import get_over
from ..models import Extra, Innings, Match, Over
from ..schemas.extras import ExtraCreate


def record_extra(session: Session, match: Match, innings: Innings, data: ExtraCreate, now: datetime) -> Extra:
    """Credit extra runs to the innings, and to its over when one is given.

    Byes and leg byes follow a legal delivery, so they also count as a ball
    and always land in an over: the given one, else the over in progress.
    """
    if data.runs < 0:
        raise ValidationError("Runs cannot be negative")
    ensure_open_for_recording(match, innings)

    counts_as_ball = data.extra_type.counts_as_ball
    over = None
    if data.over_id:
        over = get_over(session, innings.id, data.over_id)
    if counts_as_ball:
        over_number = over.over_number if over is not None else innings.completed_overs
        over = over_for_legal_delivery(session, innings.id, over_number)

    extra = Extra(
        innings_id=innings.id,
        extra_type=data.extra_type,
        runs=data.runs,
        over_id=over.id if over is not None else None,
        created_at=now,
        updated_at=now,
    )
    session.add(extra)

    apply_innings_delta(innings, runs=data.runs, balls=1 if counts_as_ball else 0)
    if over is not None:
        apply_over_delta(over, legal=1 if counts_as_ball else 0, runs=data.runs)

    match.updated_at = now
    session.flush()
    refresh_innings_status(session, match, innings, now)

    logger.info(
        "Recorded {} of {} runs in innings {} -> {}/{} ({} balls)",
        data.extra_type.value, data.runs, innings.id,
        innings.total_runs, innings.total_wickets, innings.total_balls,
    )
    return extra


def delete_extra(session: Session, match: Match, innings: Innings, extra: Extra, now: datetime) -> None:
    ensure_match_open(match)

    counts_as_ball = extra.extra_type.counts_as_ball
    apply_innings_delta(innings, runs=-extra.runs, balls=-1 if counts_as_ball else 0)
    if extra.over_id:
        over = session.get(Over, extra.over_id)
        if over is not None:
            apply_over_delta(over, legal=-1 if counts_as_ball else 0, runs=-extra.runs)

    extra_id, extra_type, runs = extra.id, extra.extra_type, extra.runs
    session.delete(extra)
    match.updated_at = now
    session.flush()
    refresh_innings_status(session, match, innings, now)

    logger.info("Deleted {} {} ({} runs) from innings {}", extra_type.value, extra_id, runs, innings.id)
