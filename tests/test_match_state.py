"""Match state machine: creation, forceful end, bounded undo and direct status changes."""

import pytest

from cricket_scoring.models import MatchStatus
from cricket_scoring.schemas import EndMatchRequest, MatchCreate
from cricket_scoring.scoring import ConflictError, NotFoundError, ValidationError
from cricket_scoring.scoring.match_state import undo_seconds_remaining

from .conftest import UMPIRE_ID


def test_create_match_defaults(service, umpire, roster):
    created = service.create_match(
        umpire, MatchCreate(team_a_id=roster["a"]["team_id"], team_b_id=roster["b"]["team_id"])
    )
    assert created.name == "Falcons vs Hawks"
    assert created.overs_limit == 20
    assert created.owner_id == UMPIRE_ID
    assert created.status == MatchStatus.UPCOMING
    assert created.ended_at is None


def test_create_match_with_unknown_team(service, umpire, roster):
    with pytest.raises(NotFoundError, match="Team not found"):
        service.create_match(umpire, MatchCreate(team_a_id=roster["a"]["team_id"], team_b_id="ghost"))


def test_match_teams_must_differ(roster):
    with pytest.raises(ValueError, match="Teams must be different"):
        MatchCreate(team_a_id=roster["a"]["team_id"], team_b_id=roster["a"]["team_id"])


def test_list_matches_filters_by_owner_for_umpires(service, umpire, other_umpire, admin, viewer, roster):
    teams = MatchCreate(team_a_id=roster["a"]["team_id"], team_b_id=roster["b"]["team_id"])
    mine = service.create_match(umpire, teams)
    theirs = service.create_match(other_umpire, teams)

    assert [m.id for m in service.list_matches(umpire)] == [mine.id]
    assert [m.id for m in service.list_matches(other_umpire)] == [theirs.id]
    assert {m.id for m in service.list_matches(admin)} == {mine.id, theirs.id}
    assert {m.id for m in service.list_matches(viewer)} == {mine.id, theirs.id}


def test_end_match_records_who_and_when(service, umpire, clock, match, innings):
    response = service.end_match(umpire, match.id, EndMatchRequest(comment="Rain stopped play"))

    assert response.message == "Match ended successfully"
    assert response.match.status == MatchStatus.COMPLETED
    assert response.match.ended_by == "UMPIRE"
    assert response.match.end_comment == "Rain stopped play"
    assert response.match.ended_at == clock.now


def test_end_match_default_comment(service, admin, match):
    response = service.end_match(admin, match.id)
    assert response.match.end_comment == "Match ended by ADMIN"
    assert response.match.ended_by == "ADMIN"


def test_cannot_end_twice(service, umpire, match):
    service.end_match(umpire, match.id)
    with pytest.raises(ConflictError):
        service.end_match(umpire, match.id)


def test_undo_inside_window_restores_ongoing(service, umpire, viewer, clock, match, innings):
    service.end_match(umpire, match.id)
    clock.advance(minutes=4, seconds=59)

    response = service.undo_match_end(umpire, match.id)

    assert response.message == "Match cancellation undone successfully"
    assert response.match.status == MatchStatus.ONGOING
    assert response.match.ended_at is None
    assert response.match.ended_by is None
    assert response.match.end_comment is None


def test_undo_exactly_at_window_boundary(service, umpire, clock, match, innings):
    service.end_match(umpire, match.id)
    clock.advance(minutes=5)
    assert service.undo_match_end(umpire, match.id).match.status == MatchStatus.ONGOING


def test_undo_after_window_rejected(service, umpire, viewer, clock, match, innings):
    service.end_match(umpire, match.id)
    clock.advance(minutes=5, seconds=1)

    with pytest.raises(ConflictError, match=r"Undo is no longer available \(5\.0 minutes passed\. Limited to 5 minutes\)"):
        service.undo_match_end(umpire, match.id)

    state = service.get_match_state(viewer, match.id)
    assert state.status == MatchStatus.COMPLETED
    assert state.ended_at is not None


def test_undo_requires_a_forceful_end(service, umpire, match, innings):
    with pytest.raises(ConflictError, match="not cancelled"):
        service.undo_match_end(umpire, match.id)

    service.set_match_status(umpire, match.id, MatchStatus.COMPLETED)
    with pytest.raises(ConflictError, match="timestamp not found"):
        service.undo_match_end(umpire, match.id)


def test_undo_seconds_remaining_counts_down(service, umpire, viewer, clock, match):
    service.end_match(umpire, match.id)
    assert service.get_match_state(viewer, match.id).undo_seconds_remaining == 300

    clock.advance(minutes=2)
    assert service.get_match_state(viewer, match.id).undo_seconds_remaining == 180

    clock.advance(minutes=10)
    assert service.get_match_state(viewer, match.id).undo_seconds_remaining == 0


def test_undo_seconds_remaining_zero_without_forceful_end(match, clock):
    assert undo_seconds_remaining(match, clock.now, 5) == 0


def test_direct_status_transitions(service, umpire, match):
    assert service.set_match_status(umpire, match.id, MatchStatus.UPCOMING).status == MatchStatus.UPCOMING
    assert service.set_match_status(umpire, match.id, MatchStatus.ONGOING).status == MatchStatus.ONGOING

    with pytest.raises(ValidationError):
        service.set_match_status(umpire, match.id, MatchStatus.UPCOMING)

    completed = service.set_match_status(umpire, match.id, MatchStatus.COMPLETED)
    assert completed.status == MatchStatus.COMPLETED
    assert completed.ended_at is None

    with pytest.raises(ConflictError):
        service.set_match_status(umpire, match.id, MatchStatus.ONGOING)


def test_match_state_includes_teams_and_innings(service, umpire, viewer, match, innings, roster):
    state = service.get_match_state(viewer, match.id)
    assert state.team_a.name == "Falcons"
    assert len(state.team_b.players) == 11
    assert [inn.id for inn in state.innings] == [innings.id]
    assert state.result is None
