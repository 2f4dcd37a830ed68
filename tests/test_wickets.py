"""Wicket ledger, including the implicit delivery when no ball is given."""

import pytest

from cricket_scoring.models import BallType, InningsStatus, MatchStatus, WicketType
from cricket_scoring.schemas import InningsCreate, MatchCreate
from cricket_scoring.scoring import ConflictError, NotFoundError

from .helpers import ball, wicket


@pytest.fixture
def a(roster):
    return roster["a"]["players"]


@pytest.fixture
def b(roster):
    return roster["b"]["players"]


def _row(service, auth, match_id):
    return service.list_innings(auth, match_id)[0]


def _bowling(service, auth, match_id, innings_id, player_id):
    stats = service.innings_stats(auth, match_id, innings_id)
    return next(row for row in stats.bowling if row.player_id == player_id)


def test_record_wicket_on_existing_ball(service, umpire, match, innings, a, b):
    delivery = service.record_delivery(umpire, match.id, innings.id, ball(a[0], b[10], 0, non_striker=a[1]))
    recorded = service.record_wicket(
        umpire, match.id, innings.id,
        wicket(a[0], b[10], WicketType.CAUGHT, ball_id=delivery.id, fielder_id=b[3]),
    )

    assert recorded.ball_id == delivery.id
    assert recorded.fielder_id == b[3]
    assert recorded.ball.is_wicket is True
    assert _row(service, umpire, match.id).total_wickets == 1
    assert _bowling(service, umpire, match.id, innings.id, b[10]).wickets == 1


def test_wicket_clears_the_dismissed_batter_from_the_crease(service, umpire, match, innings, a, b):
    delivery = service.record_delivery(umpire, match.id, innings.id, ball(a[0], b[10], 0, non_striker=a[1]))
    service.record_wicket(umpire, match.id, innings.id, wicket(a[0], b[10], WicketType.BOWLED, ball_id=delivery.id))

    row = _row(service, umpire, match.id)
    assert row.current_striker_id is None
    assert row.current_non_striker_id == a[1]


def test_one_wicket_per_ball(service, umpire, match, innings, a, b):
    delivery = service.record_delivery(umpire, match.id, innings.id, ball(a[0], b[10], 1, non_striker=a[1]))
    service.record_wicket(umpire, match.id, innings.id, wicket(a[0], b[10], WicketType.RUN_OUT, ball_id=delivery.id))

    with pytest.raises(ConflictError):
        service.record_wicket(
            umpire, match.id, innings.id, wicket(a[1], b[10], WicketType.RUN_OUT, ball_id=delivery.id)
        )
    assert _row(service, umpire, match.id).total_wickets == 1


def test_delete_wicket_reverses_tallies_and_clears_flag(service, umpire, match, innings, a, b):
    delivery = service.record_delivery(umpire, match.id, innings.id, ball(a[0], b[10], 0))
    recorded = service.record_wicket(
        umpire, match.id, innings.id, wicket(a[0], b[10], WicketType.LBW, ball_id=delivery.id)
    )

    service.delete_wicket(umpire, match.id, innings.id, recorded.id)

    assert _row(service, umpire, match.id).total_wickets == 0
    assert _bowling(service, umpire, match.id, innings.id, b[10]).wickets == 0
    balls = service.list_deliveries(umpire, match.id, innings.id)
    assert balls[0].is_wicket is False
    assert service.list_wickets(umpire, match.id, innings.id) == []


def test_wicket_without_ball_records_implicit_delivery(service, umpire, match, innings, a, b):
    recorded = service.record_wicket(umpire, match.id, innings.id, wicket(a[0], b[10], WicketType.BOWLED))

    assert recorded.ball is not None
    assert recorded.ball.runs == 0
    assert recorded.ball.ball_type == BallType.LEGAL
    assert recorded.ball.striker_player_id == a[0]
    assert recorded.ball.over.over_number == 0
    assert recorded.ball.is_wicket is True

    row = _row(service, umpire, match.id)
    assert (row.total_runs, row.total_balls, row.total_wickets) == (0, 1, 1)
    assert len(service.list_deliveries(umpire, match.id, innings.id)) == 1


def test_implicit_delivery_goes_into_the_current_over(service, umpire, match, innings, a, b):
    for _ in range(6):
        service.record_delivery(umpire, match.id, innings.id, ball(a[0], b[10], 0))
    recorded = service.record_wicket(umpire, match.id, innings.id, wicket(a[0], b[4], WicketType.STUMPED))
    assert recorded.ball.over.over_number == 1
    assert recorded.ball.bowler_id == b[4]


def test_failed_wicket_leaves_no_implicit_delivery(service, umpire, match, innings, a, b):
    service.end_match(umpire, match.id)
    with pytest.raises(ConflictError):
        service.record_wicket(umpire, match.id, innings.id, wicket(a[0], b[10], WicketType.BOWLED))
    assert service.list_deliveries(umpire, match.id, innings.id) == []


def test_unknown_ball_or_wicket(service, umpire, match, innings, a, b):
    with pytest.raises(NotFoundError, match="Ball not found"):
        service.record_wicket(umpire, match.id, innings.id, wicket(a[0], b[10], WicketType.BOWLED, ball_id="nope"))
    with pytest.raises(NotFoundError, match="Wicket not found"):
        service.delete_wicket(umpire, match.id, innings.id, "nope")


def test_ten_wickets_close_the_innings(service, umpire, match, innings, a, b):
    for batter in a[:10]:
        service.record_wicket(umpire, match.id, innings.id, wicket(batter, b[10], WicketType.BOWLED))

    row = _row(service, umpire, match.id)
    assert row.total_wickets == 10
    assert row.status == InningsStatus.COMPLETED
    assert row.completed_at is not None

    with pytest.raises(ConflictError, match="Innings is already completed"):
        service.record_delivery(umpire, match.id, innings.id, ball(a[10], b[10], 0))


def test_all_out_innings_takes_no_further_wicket(service, umpire, match, innings, a, b):
    spare = service.record_delivery(umpire, match.id, innings.id, ball(a[0], b[10], 1, non_striker=a[1]))
    for batter in a[:10]:
        service.record_wicket(umpire, match.id, innings.id, wicket(batter, b[10], WicketType.BOWLED))
    assert _row(service, umpire, match.id).status == InningsStatus.COMPLETED

    with pytest.raises(ConflictError, match="Innings is already completed"):
        service.record_wicket(
            umpire, match.id, innings.id, wicket(a[10], b[10], WicketType.RUN_OUT, ball_id=spare.id)
        )
    assert _row(service, umpire, match.id).total_wickets == 10
    assert len(service.list_wickets(umpire, match.id, innings.id)) == 10


def test_deleting_last_wicket_reopens_latest_innings(service, umpire, match, innings, a, b):
    recorded = [
        service.record_wicket(umpire, match.id, innings.id, wicket(batter, b[10], WicketType.BOWLED))
        for batter in a[:10]
    ]
    service.delete_wicket(umpire, match.id, innings.id, recorded[-1].id)

    row = _row(service, umpire, match.id)
    assert row.total_wickets == 9
    assert row.status == InningsStatus.ONGOING
    assert row.completed_at is None


def _one_over_match(service, umpire, roster):
    return service.create_match(
        umpire,
        MatchCreate(team_a_id=roster["a"]["team_id"], team_b_id=roster["b"]["team_id"], overs_limit=1),
    )


def _bowl_out_the_over(service, umpire, match_id, team_id, batter, bowler):
    opened = service.start_innings(
        umpire, match_id, InningsCreate(team_id=team_id, opening_batsman_id=batter, opening_bowler_id=bowler)
    )
    balls = [service.record_delivery(umpire, match_id, opened.id, ball(batter, bowler, 0)) for _ in range(6)]
    return opened, balls


def test_wicket_on_the_ball_that_closed_the_first_innings(service, umpire, viewer, roster, a, b):
    match = _one_over_match(service, umpire, roster)
    first, balls = _bowl_out_the_over(service, umpire, match.id, roster["a"]["team_id"], a[0], b[10])
    assert _row(service, umpire, match.id).status == InningsStatus.COMPLETED

    with pytest.raises(ConflictError, match="Innings is already completed"):
        service.record_wicket(umpire, match.id, first.id, wicket(a[0], b[10], WicketType.BOWLED, ball_id=balls[2].id))

    recorded = service.record_wicket(
        umpire, match.id, first.id, wicket(a[0], b[10], WicketType.BOWLED, ball_id=balls[-1].id)
    )
    assert recorded.ball_id == balls[-1].id

    row = _row(service, umpire, match.id)
    assert (row.total_balls, row.total_wickets) == (6, 1)
    assert row.status == InningsStatus.COMPLETED
    assert service.get_match_state(viewer, match.id).status == MatchStatus.ONGOING


def test_wicket_on_the_ball_that_completed_the_match(service, umpire, viewer, roster, a, b):
    match = _one_over_match(service, umpire, roster)
    _bowl_out_the_over(service, umpire, match.id, roster["a"]["team_id"], a[0], b[10])
    second, balls = _bowl_out_the_over(service, umpire, match.id, roster["b"]["team_id"], b[0], a[10])
    assert service.get_match_state(viewer, match.id).status == MatchStatus.COMPLETED

    service.record_wicket(umpire, match.id, second.id, wicket(b[0], a[10], WicketType.LBW, ball_id=balls[-1].id))

    state = service.get_match_state(viewer, match.id)
    assert state.status == MatchStatus.COMPLETED
    assert state.ended_at is None
    assert state.innings[1].total_wickets == 1
    assert state.result.text == "Match Tied"

    with pytest.raises(ConflictError, match="Match is already completed"):
        service.record_wicket(umpire, match.id, second.id, wicket(b[1], a[10], WicketType.LBW, ball_id=balls[0].id))


def test_forcefully_ended_match_takes_no_wicket_on_its_last_ball(service, umpire, roster, a, b):
    match = _one_over_match(service, umpire, roster)
    first, balls = _bowl_out_the_over(service, umpire, match.id, roster["a"]["team_id"], a[0], b[10])
    service.end_match(umpire, match.id)

    with pytest.raises(ConflictError, match="Match is already completed"):
        service.record_wicket(umpire, match.id, first.id, wicket(a[0], b[10], WicketType.BOWLED, ball_id=balls[-1].id))
    assert _row(service, umpire, match.id).total_wickets == 0
