"""Facade over the scoring core.

Every method takes the caller's :class:`AuthContext` explicitly, runs in a
single database transaction and returns response schemas built before the
session closes. Mutations are serialized per match and per innings.
"""

from contextlib import ExitStack, contextmanager
from datetime import datetime
from typing import Callable, Generator, List, Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from . import deliveries, extras, innings as innings_ops, match_state, views, wickets
from .access import AuthContext, owner_filter, require_match_writer, require_scorer
from .errors import ConflictError, InternalError, ScoringError
from .locks import KeyedLockRegistry, innings_key, match_key
from .repository import get_ball, get_extra, get_innings, get_match, get_wicket
from ..config import settings
from ..database import get_session_local, session_scope
from ..models import BallType, Innings, Match, MatchStatus
from ..models.base import utcnow
from ..schemas import (
    BallCreate,
    BallResponse,
    EndMatchRequest,
    ExtraCreate,
    ExtraResponse,
    InningsCreate,
    InningsResponse,
    InningsStatsResponse,
    MatchCreate,
    MatchResponse,
    MatchStateResponse,
    MatchTransitionResponse,
    MessageResponse,
    WicketCreate,
    WicketResponse,
)


Clock = Callable[[], datetime]


class ScoringService:
    """Entry point for every scoring operation."""

    def __init__(
        self,
        session_factory: Optional[sessionmaker] = None,
        locks: Optional[KeyedLockRegistry] = None,
        clock: Optional[Clock] = None,
        undo_window_minutes: Optional[int] = None,
        default_overs_limit: Optional[int] = None,
    ):
        self._session_factory = session_factory
        self.locks = locks or KeyedLockRegistry()
        self.clock = clock or utcnow
        self.undo_window_minutes = (
            undo_window_minutes if undo_window_minutes is not None else settings.scoring.undo_window_minutes
        )
        self.default_overs_limit = default_overs_limit or settings.scoring.default_overs_limit

    @property
    def session_factory(self) -> sessionmaker:
        if self._session_factory is None:
            self._session_factory = get_session_local()
        return self._session_factory

    @contextmanager
    def _unit_of_work(self, *lock_keys: str) -> Generator[Session, None, None]:
        """Hold the given locks, in order, around one transaction."""
        with ExitStack() as stack:
            for key in lock_keys:
                stack.enter_context(self.locks.hold(key))
            try:
                with session_scope(self.session_factory) as session:
                    yield session
            except ScoringError:
                raise
            except IntegrityError as e:
                logger.warning("Integrity violation rolled back: {}", e.orig)
                raise ConflictError("The change conflicts with existing scoring data") from e
            except SQLAlchemyError as e:
                logger.exception("Store failure")
                raise InternalError("Database operation failed") from e

    def _write_scope(self, auth: AuthContext, match_id: str, innings_id: Optional[str] = None):
        """Reject non-scorers before any lock is taken, then lock the match and innings."""
        require_scorer(auth)
        keys = [match_key(match_id)]
        if innings_id is not None:
            keys.append(innings_key(innings_id))
        return self._unit_of_work(*keys)

    def _load_for_write(self, session: Session, auth: AuthContext, match_id: str) -> Match:
        """Role check, then existence, then ownership."""
        require_scorer(auth)
        match = get_match(session, match_id, for_update=True)
        require_match_writer(auth, match)
        return match

    # Matches

    def create_match(self, auth: AuthContext, data: MatchCreate) -> MatchResponse:
        require_scorer(auth)
        with self._unit_of_work() as session:
            match = match_state.create_match(session, auth, data, self.clock(), self.default_overs_limit)
            return views.match_response(match)

    def list_matches(self, auth: AuthContext) -> List[MatchResponse]:
        """Newest first; umpires only see the matches they own."""
        with self._unit_of_work() as session:
            stmt = select(Match).order_by(Match.created_at.desc(), Match.id)
            owner = owner_filter(auth)
            if owner is not None:
                stmt = stmt.where(Match.owner_id == owner)
            return [views.match_response(m) for m in session.execute(stmt).scalars()]

    def get_match_state(self, auth: AuthContext, match_id: str) -> MatchStateResponse:
        with self._unit_of_work() as session:
            match = get_match(session, match_id)
            return views.match_state(session, match, self.clock(), self.undo_window_minutes)

    def set_match_status(self, auth: AuthContext, match_id: str, status: MatchStatus) -> MatchResponse:
        with self._write_scope(auth, match_id) as session:
            match = self._load_for_write(session, auth, match_id)
            match_state.set_status(session, match, status, self.clock())
            return views.match_response(match)

    def end_match(
        self, auth: AuthContext, match_id: str, request: Optional[EndMatchRequest] = None
    ) -> MatchTransitionResponse:
        comment = request.comment if request is not None else None
        with self._write_scope(auth, match_id) as session:
            match = self._load_for_write(session, auth, match_id)
            match_state.end_match(session, auth, match, comment, self.clock())
            return MatchTransitionResponse(message="Match ended successfully", match=views.match_response(match))

    def undo_match_end(self, auth: AuthContext, match_id: str) -> MatchTransitionResponse:
        with self._write_scope(auth, match_id) as session:
            match = self._load_for_write(session, auth, match_id)
            match_state.undo_end(session, match, self.clock(), self.undo_window_minutes)
            return MatchTransitionResponse(
                message="Match cancellation undone successfully", match=views.match_response(match)
            )

    # Innings

    def start_innings(self, auth: AuthContext, match_id: str, data: InningsCreate) -> InningsResponse:
        with self._write_scope(auth, match_id) as session:
            match = self._load_for_write(session, auth, match_id)
            innings = innings_ops.start_innings(session, match, data, self.clock())
            return views.innings_response(innings)

    def list_innings(self, auth: AuthContext, match_id: str) -> List[InningsResponse]:
        with self._unit_of_work() as session:
            get_match(session, match_id)
            return [views.innings_response(inn) for inn in views.list_innings(session, match_id)]

    def innings_stats(self, auth: AuthContext, match_id: str, innings_id: str) -> InningsStatsResponse:
        with self._unit_of_work() as session:
            get_match(session, match_id)
            innings = get_innings(session, match_id, innings_id)
            return views.innings_stats(session, innings.id)

    # Delivery ledger

    def record_delivery(
        self, auth: AuthContext, match_id: str, innings_id: str, data: BallCreate
    ) -> BallResponse:
        with self._write_scope(auth, match_id, innings_id) as session:
            match = self._load_for_write(session, auth, match_id)
            innings = get_innings(session, match_id, innings_id, for_update=True)
            ball = deliveries.record_delivery(session, match, innings, data, self.clock())
            return views.ball_response(ball)

    def delete_delivery(self, auth: AuthContext, match_id: str, innings_id: str, ball_id: str) -> MessageResponse:
        with self._write_scope(auth, match_id, innings_id) as session:
            match = self._load_for_write(session, auth, match_id)
            innings = get_innings(session, match_id, innings_id, for_update=True)
            ball = get_ball(session, innings.id, ball_id)
            deliveries.delete_delivery(session, match, innings, ball, self.clock())
            return MessageResponse(message="Ball deleted successfully")

    def list_deliveries(self, auth: AuthContext, match_id: str, innings_id: str) -> List[BallResponse]:
        with self._unit_of_work() as session:
            get_match(session, match_id)
            innings = get_innings(session, match_id, innings_id)
            return [views.ball_response(ball) for ball in views.list_balls(session, innings.id)]

    # Extras ledger

    def record_extra(self, auth: AuthContext, match_id: str, innings_id: str, data: ExtraCreate) -> ExtraResponse:
        with self._write_scope(auth, match_id, innings_id) as session:
            match = self._load_for_write(session, auth, match_id)
            innings = get_innings(session, match_id, innings_id, for_update=True)
            extra = extras.record_extra(session, match, innings, data, self.clock())
            return views.extra_response(extra)

    def delete_extra(self, auth: AuthContext, match_id: str, innings_id: str, extra_id: str) -> MessageResponse:
        with self._write_scope(auth, match_id, innings_id) as session:
            match = self._load_for_write(session, auth, match_id)
            innings = get_innings(session, match_id, innings_id, for_update=True)
            extra = get_extra(session, innings.id, extra_id)
            extras.delete_extra(session, match, innings, extra, self.clock())
            return MessageResponse(message="Extra deleted successfully")

    def list_extras(self, auth: AuthContext, match_id: str, innings_id: str) -> List[ExtraResponse]:
        with self._unit_of_work() as session:
            get_match(session, match_id)
            innings = get_innings(session, match_id, innings_id)
            return [views.extra_response(extra) for extra in views.list_extras(session, innings.id)]

    # Wicket ledger

    def record_wicket(self, auth: AuthContext, match_id: str, innings_id: str, data: WicketCreate) -> WicketResponse:
        """Record a dismissal; without a ball id the delivery is recorded first."""
        with self._write_scope(auth, match_id, innings_id) as session:
            match = self._load_for_write(session, auth, match_id)
            innings = get_innings(session, match_id, innings_id, for_update=True)
            now = self.clock()

            if not data.ball_id:
                ball = deliveries.record_delivery(
                    session, match, innings, self._implicit_delivery(innings, data), now, refresh_status=False
                )
                logger.warning(
                    "No ball given for wicket in innings {}; recorded zero-run delivery {}", innings.id, ball.id
                )
                data = data.model_copy(update={"ball_id": ball.id})

            wicket = wickets.record_wicket(session, match, innings, data, now)
            return views.wicket_response(wicket)

    @staticmethod
    def _implicit_delivery(innings: Innings, data: WicketCreate) -> BallCreate:
        over_number = data.over_number
        if over_number is None:
            over_number = innings.completed_overs
        return BallCreate(
            over_number=over_number,
            striker_player_id=data.striker_player_id or data.player_out_id,
            non_striker_player_id=data.non_striker_player_id,
            bowler_id=data.bowler_id,
            runs=0,
            ball_type=BallType.LEGAL,
        )

    def delete_wicket(self, auth: AuthContext, match_id: str, innings_id: str, wicket_id: str) -> MessageResponse:
        with self._write_scope(auth, match_id, innings_id) as session:
            match = self._load_for_write(session, auth, match_id)
            innings = get_innings(session, match_id, innings_id, for_update=True)
            wicket = get_wicket(session, innings.id, wicket_id)
            wickets.delete_wicket(session, match, innings, wicket, self.clock())
            return MessageResponse(message="Wicket deleted successfully")

    def list_wickets(self, auth: AuthContext, match_id: str, innings_id: str) -> List[WicketResponse]:
        with self._unit_of_work() as session:
            get_match(session, match_id)
            innings = get_innings(session, match_id, innings_id)
            return [views.wicket_response(w) for w in views.list_wickets(session, innings.id)]
