"""Pydantic schemas for the extras ledger."""

from typing import Optional

from pydantic import Field

from .base import CamelModel, UtcDatetime
from ..models.extras import ExtraType


class ExtraCreate(CamelModel):
    """Schema for recording an extra."""

    extra_type: ExtraType = Field(..., description="Kind of extra")
    runs: int = Field(..., description="Runs credited")
    over_id: Optional[str] = Field(None, description="Over the extra belongs to")


class ExtraResponse(CamelModel):
    """Schema for extra response data."""

    id: str
    innings_id: str
    extra_type: ExtraType
    runs: int
    over_id: Optional[str] = None
    created_at: UtcDatetime
