"""Error body returned by every failing endpoint."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Stable error kind, e.g. InvalidCredentials.")
    message: str = Field(..., description="Human-readable message.")
