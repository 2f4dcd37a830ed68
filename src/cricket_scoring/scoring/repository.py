"""Lookups shared by the ledgers; every miss raises :class:`NotFoundError`."""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .errors import NotFoundError
from ..models import Ball, Extra, Innings, Match, Over, Player, Team, Wicket


def get_match(session: Session, match_id: str, for_update: bool = False) -> Match:
    stmt = select(Match).where(Match.id == match_id)
    if for_update:
        stmt = stmt.with_for_update()
    match = session.execute(stmt).scalar_one_or_none()
    if match is None:
        raise NotFoundError("Match not found")
    return match


def get_innings(session: Session, match_id: str, innings_id: str, for_update: bool = False) -> Innings:
    """Innings of the given match, row-locked when ``for_update`` is set."""
    stmt = select(Innings).where(Innings.id == innings_id, Innings.match_id == match_id)
    if for_update:
        stmt = stmt.with_for_update()
    innings = session.execute(stmt).scalar_one_or_none()
    if innings is None:
        raise NotFoundError("Innings not found")
    return innings


def get_team(session: Session, team_id: str) -> Team:
    team = session.get(Team, team_id)
    if team is None:
        raise NotFoundError("Team not found")
    return team


def get_ball(session: Session, innings_id: str, ball_id: str) -> Ball:
    ball = session.execute(
        select(Ball).where(Ball.id == ball_id, Ball.innings_id == innings_id)
    ).scalar_one_or_none()
    if ball is None:
        raise NotFoundError("Ball not found")
    return ball


def get_extra(session: Session, innings_id: str, extra_id: str) -> Extra:
    extra = session.execute(
        select(Extra).where(Extra.id == extra_id, Extra.innings_id == innings_id)
    ).scalar_one_or_none()
    if extra is None:
        raise NotFoundError("Extra not found")
    return extra


def get_wicket(session: Session, innings_id: str, wicket_id: str) -> Wicket:
    wicket = session.execute(
        select(Wicket).where(Wicket.id == wicket_id, Wicket.innings_id == innings_id)
    ).scalar_one_or_none()
    if wicket is None:
        raise NotFoundError("Wicket not found")
    return wicket


def get_over(session: Session, innings_id: str, over_id: str) -> Over:
    over = session.execute(
        select(Over).where(Over.id == over_id, Over.innings_id == innings_id)
    ).scalar_one_or_none()
    if over is None:
        raise NotFoundError("Over not found")
    return over


def find_wicket_for_ball(session: Session, ball_id: str) -> Optional[Wicket]:
    return session.execute(select(Wicket).where(Wicket.ball_id == ball_id)).scalar_one_or_none()


def team_player_ids(session: Session, team_id: str) -> List[str]:
    return list(session.execute(select(Player.id).where(Player.team_id == team_id)).scalars())


def squad_size(session: Session, team_id: str) -> int:
    return session.execute(
        select(func.count(Player.id)).where(Player.team_id == team_id)
    ).scalar_one()
