"""Read models: response schemas built while the session is still open."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .match_state import compute_result, undo_seconds_remaining
from ..models import Ball, BattingStats, BowlingStats, Extra, Innings, Match, Over, Wicket
from ..schemas import (
    BallResponse,
    BattingStatsResponse,
    BowlingStatsResponse,
    ExtraResponse,
    InningsDetail,
    InningsResponse,
    InningsStatsResponse,
    MatchResponse,
    MatchStateResponse,
    OverResponse,
    TeamResponse,
    WicketResponse,
)


def match_response(match: Match) -> MatchResponse:
    return MatchResponse.model_validate(match)


def innings_response(innings: Innings) -> InningsResponse:
    return InningsResponse.model_validate(innings)


def ball_response(ball: Ball, with_over: bool = True) -> BallResponse:
    response = BallResponse.model_validate(ball)
    if not with_over:
        response.over = None
    return response


def extra_response(extra: Extra) -> ExtraResponse:
    return ExtraResponse.model_validate(extra)


def wicket_response(wicket: Wicket, with_ball: bool = True) -> WicketResponse:
    response = WicketResponse.model_validate(wicket)
    if not with_ball:
        response.ball = None
    return response


def list_balls(session: Session, innings_id: str) -> List[Ball]:
    """Deliveries in bowling order: by over, then by position in the over."""
    return list(
        session.execute(
            select(Ball)
            .join(Over, Ball.over_id == Over.id)
            .where(Ball.innings_id == innings_id)
            .order_by(Over.over_number, Ball.ball_number)
        ).scalars()
    )


def list_extras(session: Session, innings_id: str) -> List[Extra]:
    return list(
        session.execute(
            select(Extra).where(Extra.innings_id == innings_id).order_by(Extra.created_at, Extra.id)
        ).scalars()
    )


def list_wickets(session: Session, innings_id: str) -> List[Wicket]:
    return list(
        session.execute(
            select(Wicket).where(Wicket.innings_id == innings_id).order_by(Wicket.created_at, Wicket.id)
        ).scalars()
    )


def list_overs(session: Session, innings_id: str) -> List[Over]:
    return list(
        session.execute(
            select(Over).where(Over.innings_id == innings_id).order_by(Over.over_number)
        ).scalars()
    )


def list_innings(session: Session, match_id: str) -> List[Innings]:
    return list(
        session.execute(
            select(Innings).where(Innings.match_id == match_id).order_by(Innings.innings_number)
        ).scalars()
    )


def innings_stats(session: Session, innings_id: str) -> InningsStatsResponse:
    batting = session.execute(
        select(BattingStats)
        .where(BattingStats.innings_id == innings_id)
        .order_by(BattingStats.runs.desc(), BattingStats.created_at)
    ).scalars()
    bowling = session.execute(
        select(BowlingStats)
        .where(BowlingStats.innings_id == innings_id)
        .order_by(BowlingStats.wickets.desc(), BowlingStats.runs, BowlingStats.created_at)
    ).scalars()
    return InningsStatsResponse(
        innings_id=innings_id,
        batting=[BattingStatsResponse.model_validate(row) for row in batting],
        bowling=[BowlingStatsResponse.model_validate(row) for row in bowling],
    )


def innings_detail(session: Session, innings: Innings) -> InningsDetail:
    """An innings with every ledger entry and tally attached."""
    extras = list_extras(session, innings.id)
    stats = innings_stats(session, innings.id)
    base = InningsResponse.model_validate(innings).model_dump()
    return InningsDetail(
        **base,
        extras_total=sum(extra.runs for extra in extras),
        overs=[OverResponse.model_validate(over) for over in list_overs(session, innings.id)],
        balls=[ball_response(ball, with_over=False) for ball in list_balls(session, innings.id)],
        extras=[extra_response(extra) for extra in extras],
        wickets=[wicket_response(w, with_ball=False) for w in list_wickets(session, innings.id)],
        batting_stats=stats.batting,
        bowling_stats=stats.bowling,
    )


def match_state(session: Session, match: Match, now: datetime, undo_window_minutes: int) -> MatchStateResponse:
    """Everything a scoreboard needs in one payload."""
    innings = list_innings(session, match.id)
    base = MatchResponse.model_validate(match).model_dump()
    return MatchStateResponse(
        **base,
        team_a=_team(match.team_a),
        team_b=_team(match.team_b),
        innings=[innings_detail(session, inn) for inn in innings],
        result=compute_result(match, innings),
        undo_seconds_remaining=undo_seconds_remaining(match, now, undo_window_minutes),
    )


def _team(team) -> Optional[TeamResponse]:
    if team is None:
        return None
    return TeamResponse.model_validate(team)
