"""Roster loading: teams and players the scoring core references but never mutates."""

from pathlib import Path
from typing import List

from loguru import logger
from pydantic import TypeAdapter
from sqlalchemy import select
from sqlalchemy.orm import Session

from .models import Player, Team
from .schemas import TeamCreate

_teams_adapter = TypeAdapter(List[TeamCreate])


def read_roster_file(path: Path) -> List[TeamCreate]:
    """Parse a JSON list of teams, each with its players."""
    return _teams_adapter.validate_json(Path(path).read_bytes())


def load_roster(session: Session, teams: List[TeamCreate]) -> List[Team]:
    """Insert teams and their squads; a team whose name already exists is reused."""
    loaded = []
    for data in teams:
        team = session.execute(select(Team).where(Team.name == data.name)).scalar_one_or_none()
        if team is None:
            team = Team(name=data.name, short_name=data.short_name, owner_id=data.owner_id)
            session.add(team)
            session.flush()
            logger.info("Registered team {} ({})", team.name, team.id)

        existing = {p.name for p in session.execute(select(Player).where(Player.team_id == team.id)).scalars()}
        for player in data.players:
            if player.name in existing:
                continue
            session.add(Player(name=player.name, team_id=team.id, jersey_number=player.jersey_number, role=player.role))
            existing.add(player.name)
        session.flush()
        loaded.append(team)
    return loaded
