"""Common DTOs for API responses."""
from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Health status", example="healthy")
    service: str = Field(..., description="Service name", example="splitify")
    auth_backend: str = Field(..., description="Which auth backend is active", example="supabase")


class Toast(BaseModel):
    """One-shot notification shown on the next rendered page."""
    kind: str = Field("error", description="error or success")
    message: str = Field(..., description="Text shown to the user")
