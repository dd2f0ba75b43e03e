"""Pydantic schemas for handover document endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class HandoverResponse(BaseModel):
    """A stored handover document with its payload decoded."""

    id: str
    data: Any = Field(..., description="The stored JSON payload, returned as written.")
    last_updated: datetime


class HandoverSummary(BaseModel):
    id: str
    last_updated: datetime


class HandoverListResponse(BaseModel):
    """Response for GET /handovers: most recently updated first."""

    handovers: list[HandoverSummary]
