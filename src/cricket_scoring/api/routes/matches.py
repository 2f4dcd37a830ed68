"""Match routes: scheduling, live state and the state machine."""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status

from ..dependencies import get_auth_context, get_service
from ...schemas import (
    EndMatchRequest,
    MatchCreate,
    MatchResponse,
    MatchStateResponse,
    MatchStatusUpdate,
    MatchTransitionResponse,
)
from ...scoring import AuthContext, ScoringService

router = APIRouter(prefix="/api/matches", tags=["matches"])


@router.post("", response_model=MatchResponse, status_code=status.HTTP_201_CREATED)
def create_match(
    data: MatchCreate,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.create_match(auth, data)


@router.get("", response_model=List[MatchResponse])
def list_matches(
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.list_matches(auth)


@router.get("/{match_id}", response_model=MatchStateResponse)
def get_match(
    match_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    """Full match state; polled by scoreboards."""
    return service.get_match_state(auth, match_id)


@router.patch("/{match_id}", response_model=MatchResponse)
def update_match_status(
    match_id: str,
    data: MatchStatusUpdate,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.set_match_status(auth, match_id, data.status)


@router.post("/{match_id}/end-match", response_model=MatchTransitionResponse)
def end_match(
    match_id: str,
    data: Optional[EndMatchRequest] = Body(None),
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.end_match(auth, match_id, data)


@router.post("/{match_id}/undo-cancellation", response_model=MatchTransitionResponse)
def undo_cancellation(
    match_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.undo_match_end(auth, match_id)
