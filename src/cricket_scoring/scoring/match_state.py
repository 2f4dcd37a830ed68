"""Match state machine: UPCOMING -> ONGOING -> COMPLETED, with a bounded undo.

A forceful end stamps ``ended_at`` and may be undone within the configured
window. A natural completion (the second innings closing) leaves ``ended_at``
empty and cannot be undone.
"""

from datetime import datetime, timedelta
from typing import Optional

from loguru import logger
from sqlalchemy.orm import Session

from .access import AuthContext
from .errors import ConflictError, ValidationError
from .repository import get_team
from ..models import Innings, InningsStatus, Match, MatchStatus
from ..models.base import as_utc
from ..schemas.matches import MatchCreate, MatchResult


# Direct status changes allowed through PATCH; leaving COMPLETED needs undo
ALLOWED_TRANSITIONS = {
    MatchStatus.UPCOMING: {MatchStatus.UPCOMING, MatchStatus.ONGOING, MatchStatus.COMPLETED},
    MatchStatus.ONGOING: {MatchStatus.ONGOING, MatchStatus.COMPLETED},
    MatchStatus.COMPLETED: {MatchStatus.COMPLETED},
}


def create_match(
    session: Session,
    auth: AuthContext,
    data: MatchCreate,
    now: datetime,
    default_overs_limit: int,
) -> Match:
    """Schedule a match owned by the calling umpire."""
    team_a = get_team(session, data.team_a_id)
    team_b = get_team(session, data.team_b_id)

    match = Match(
        name=data.name or f"{team_a.name} vs {team_b.name}",
        team_a_id=team_a.id,
        team_b_id=team_b.id,
        owner_id=auth.subject,
        toss_winner_id=data.toss_winner_id,
        toss_decision=data.toss_decision,
        overs_limit=data.overs_limit or default_overs_limit,
        status=MatchStatus.UPCOMING,
        created_at=now,
        updated_at=now,
    )
    session.add(match)
    session.flush()
    logger.info("Created match {} '{}' ({} overs) for {}", match.id, match.name, match.overs_limit, auth.subject)
    return match


def end_match(session: Session, auth: AuthContext, match: Match, comment: Optional[str], now: datetime) -> Match:
    """Forcefully complete a match, recording who ended it and when."""
    if match.status == MatchStatus.COMPLETED:
        raise ConflictError("Match is already completed")

    match.status = MatchStatus.COMPLETED
    match.ended_by = auth.role.value
    match.end_comment = comment or f"Match ended by {auth.role.value}"
    match.ended_at = now
    match.updated_at = now
    session.flush()
    logger.info("Match {} ended by {} ({})", match.id, auth.role.value, auth.subject)
    return match


def undo_end(session: Session, match: Match, now: datetime, window_minutes: int) -> Match:
    """Restore a forcefully ended match to ONGOING while the window is open."""
    if match.status != MatchStatus.COMPLETED:
        raise ConflictError("Match is not cancelled")
    if match.ended_at is None:
        raise ConflictError("Match cancellation timestamp not found")

    elapsed = (now - as_utc(match.ended_at)).total_seconds() / 60
    if elapsed > window_minutes:
        raise ConflictError(
            f"Undo is no longer available ({elapsed:.1f} minutes passed. Limited to {window_minutes} minutes)"
        )

    match.status = MatchStatus.ONGOING
    match.ended_by = None
    match.end_comment = None
    match.ended_at = None
    match.updated_at = now
    session.flush()
    logger.info("Undid end of match {} after {:.1f} minutes", match.id, elapsed)
    return match


def set_status(session: Session, match: Match, status: MatchStatus, now: datetime) -> Match:
    if status not in ALLOWED_TRANSITIONS[match.status]:
        if match.status == MatchStatus.COMPLETED:
            raise ConflictError("Match is already completed")
        raise ValidationError(f"Cannot change match status from {match.status.value} to {status.value}")

    if status != match.status:
        logger.info("Match {} status {} -> {}", match.id, match.status.value, status.value)
        match.status = status
        match.updated_at = now
        session.flush()
    return match


def undo_seconds_remaining(match: Match, now: datetime, window_minutes: int) -> int:
    """Seconds left to undo a forceful end; zero when nothing can be undone."""
    if match.status != MatchStatus.COMPLETED or match.ended_at is None:
        return 0
    deadline = as_utc(match.ended_at) + timedelta(minutes=window_minutes)
    return max(0, int((deadline - now).total_seconds()))


def compute_result(match: Match, innings: list[Innings]) -> Optional[MatchResult]:
    """Winner and margin once both sides have batted.

    Margins are always expressed in runs; a run chase still in progress has
    no result.
    """
    if len(innings) < 2:
        return None
    if match.status != MatchStatus.COMPLETED and any(inn.status == InningsStatus.ONGOING for inn in innings):
        return None

    runs = {match.team_a_id: 0, match.team_b_id: 0}
    for inn in innings:
        runs[inn.team_id] = runs.get(inn.team_id, 0) + inn.total_runs

    team_a_runs, team_b_runs = runs[match.team_a_id], runs[match.team_b_id]
    if team_a_runs == team_b_runs:
        return MatchResult(text="Match Tied", team_a_runs=team_a_runs, team_b_runs=team_b_runs)

    if team_a_runs > team_b_runs:
        winner, margin = match.team_a, team_a_runs - team_b_runs
    else:
        winner, margin = match.team_b, team_b_runs - team_a_runs
    return MatchResult(
        text=f"{winner.name} won by {margin} runs",
        winner_team_id=winner.id,
        margin=margin,
        team_a_runs=team_a_runs,
        team_b_runs=team_b_runs,
    )
