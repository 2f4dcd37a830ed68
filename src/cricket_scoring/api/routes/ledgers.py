"""Delivery, extras and wicket ledger routes under one innings."""

from typing import List

from fastapi import APIRouter, Depends, status

from ..dependencies import get_auth_context, get_service
from ...schemas import (
    BallCreate,
    BallResponse,
    ExtraCreate,
    ExtraResponse,
    MessageResponse,
    WicketCreate,
    WicketResponse,
)
from ...scoring import AuthContext, ScoringService

router = APIRouter(prefix="/api/matches/{match_id}/innings/{innings_id}", tags=["ledgers"])


# Deliveries

@router.post("/balls", response_model=BallResponse, status_code=status.HTTP_201_CREATED)
def record_ball(
    match_id: str,
    innings_id: str,
    data: BallCreate,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.record_delivery(auth, match_id, innings_id, data)


@router.get("/balls", response_model=List[BallResponse])
def list_balls(
    match_id: str,
    innings_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.list_deliveries(auth, match_id, innings_id)


@router.delete("/balls/{ball_id}", response_model=MessageResponse)
def delete_ball(
    match_id: str,
    innings_id: str,
    ball_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.delete_delivery(auth, match_id, innings_id, ball_id)


# Extras

@router.post("/extras", response_model=ExtraResponse, status_code=status.HTTP_201_CREATED)
def record_extra(
    match_id: str,
    innings_id: str,
    data: ExtraCreate,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.record_extra(auth, match_id, innings_id, data)


@router.get("/extras", response_model=List[ExtraResponse])
def list_extras(
    match_id: str,
    innings_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.list_extras(auth, match_id, innings_id)


@router.delete("/extras/{extra_id}", response_model=MessageResponse)
def delete_extra(
    match_id: str,
    innings_id: str,
    extra_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.delete_extra(auth, match_id, innings_id, extra_id)


# Wickets

@router.post("/wickets", response_model=WicketResponse, status_code=status.HTTP_201_CREATED)
def record_wicket(
    match_id: str,
    innings_id: str,
    data: WicketCreate,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    """Without ``ballId`` a zero-run legal delivery is recorded with the wicket."""
    return service.record_wicket(auth, match_id, innings_id, data)


@router.get("/wickets", response_model=List[WicketResponse])
def list_wickets(
    match_id: str,
    innings_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.list_wickets(auth, match_id, innings_id)


@router.delete("/wickets/{wicket_id}", response_model=MessageResponse)
def delete_wicket(
    match_id: str,
    innings_id: str,
    wicket_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.delete_wicket(auth, match_id, innings_id, wicket_id)
