"""Shared fixtures: in-memory database, seeded roster, service and HTTP client."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from cricket_scoring.api.app import create_app
from cricket_scoring.api.auth import issue_token
from cricket_scoring.api.dependencies import get_service
from cricket_scoring.database import build_engine, build_session_factory, create_tables, session_scope
from cricket_scoring.roster import load_roster
from cricket_scoring.schemas import InningsCreate, MatchCreate, PlayerCreate, TeamCreate
from cricket_scoring.scoring import AuthContext, Role, ScoringService


UMPIRE_ID = "umpire-1"
OTHER_UMPIRE_ID = "umpire-2"
ADMIN_ID = "admin-1"


class FakeClock:
    """Wall clock the tests move by hand."""

    def __init__(self, start=None):
        self.now = start or datetime(2026, 3, 1, 14, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def roster(session_factory):
    """Two teams of eleven; returns {"a": {...}, "b": {...}} with team and player ids."""
    teams = [
        TeamCreate(
            name=name,
            short_name=name[:3].upper(),
            owner_id=UMPIRE_ID,
            players=[PlayerCreate(name=f"{name} Player {i}", jersey_number=i) for i in range(1, 12)],
        )
        for name in ("Falcons", "Hawks")
    ]
    with session_scope(session_factory) as session:
        loaded = load_roster(session, teams)
        result = {}
        for key, team in zip(("a", "b"), loaded):
            result[key] = {
                "team_id": team.id,
                "name": team.name,
                "players": [p.id for p in sorted(team.players, key=lambda p: p.jersey_number)],
            }
    return result


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(session_factory, clock):
    return ScoringService(session_factory=session_factory, clock=clock, undo_window_minutes=5, default_overs_limit=20)


@pytest.fixture
def umpire():
    return AuthContext(subject=UMPIRE_ID, role=Role.UMPIRE)


@pytest.fixture
def other_umpire():
    return AuthContext(subject=OTHER_UMPIRE_ID, role=Role.UMPIRE)


@pytest.fixture
def admin():
    return AuthContext(subject=ADMIN_ID, role=Role.ADMIN)


@pytest.fixture
def viewer():
    return AuthContext(subject="viewer-1", role=Role.VIEWER)


@pytest.fixture
def match(service, umpire, roster):
    """An UPCOMING T20 match owned by the umpire."""
    return service.create_match(
        umpire,
        MatchCreate(team_a_id=roster["a"]["team_id"], team_b_id=roster["b"]["team_id"]),
    )


@pytest.fixture
def innings(service, umpire, match, roster):
    """First innings: team A batting, opener A1 facing, B11 bowling."""
    return service.start_innings(
        umpire,
        match.id,
        InningsCreate(
            team_id=roster["a"]["team_id"],
            opening_batsman_id=roster["a"]["players"][0],
            opening_bowler_id=roster["b"]["players"][10],
        ),
    )


@pytest.fixture
def app(service):
    application = create_app(service)
    application.dependency_overrides[get_service] = lambda: service
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def bearer(subject, role):
    return {"Authorization": f"Bearer {issue_token(subject, role)}"}


@pytest.fixture
def umpire_headers():
    return bearer(UMPIRE_ID, Role.UMPIRE)


@pytest.fixture
def other_umpire_headers():
    return bearer(OTHER_UMPIRE_ID, Role.UMPIRE)


@pytest.fixture
def admin_headers():
    return bearer(ADMIN_ID, Role.ADMIN)


@pytest.fixture
def viewer_headers():
    return bearer("viewer-1", Role.VIEWER)
