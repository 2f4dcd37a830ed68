"""Innings routes."""

from typing import List

from fastapi import APIRouter, Depends, status

from ..dependencies import get_auth_context, get_service
from ...schemas import InningsCreate, InningsResponse, InningsStatsResponse
from ...scoring import AuthContext, ScoringService

router = APIRouter(prefix="/api/matches/{match_id}/innings", tags=["innings"])


@router.post("", response_model=InningsResponse, status_code=status.HTTP_201_CREATED)
def start_innings(
    match_id: str,
    data: InningsCreate,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.start_innings(auth, match_id, data)


@router.get("", response_model=List[InningsResponse])
def list_innings(
    match_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.list_innings(auth, match_id)


@router.get("/{innings_id}/stats", response_model=InningsStatsResponse)
def innings_stats(
    match_id: str,
    innings_id: str,
    auth: AuthContext = Depends(get_auth_context),
    service: ScoringService = Depends(get_service),
):
    return service.innings_stats(auth, match_id, innings_id)
