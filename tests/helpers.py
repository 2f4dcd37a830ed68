"""Small builders used across the test modules."""

from cricket_scoring.models import BallType
from cricket_scoring.schemas import BallCreate, ExtraCreate, WicketCreate


def ball(striker, bowler, runs=0, over=0, ball_type=BallType.LEGAL, non_striker=None):
    return BallCreate(
        over_number=over,
        striker_player_id=striker,
        bowler_id=bowler,
        runs=runs,
        ball_type=ball_type,
        non_striker_player_id=non_striker,
    )


def extra(extra_type, runs, over_id=None):
    return ExtraCreate(extra_type=extra_type, runs=runs, over_id=over_id)


def wicket(player_out, bowler, wicket_type, ball_id=None, **kwargs):
    return WicketCreate(
        ball_id=ball_id,
        player_out_id=player_out,
        bowler_id=bowler,
        wicket_type=wicket_type,
        **kwargs,
    )
