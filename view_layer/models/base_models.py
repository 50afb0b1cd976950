"""Pydantic models for HTTP responses."""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Basic health check response."""

    status: str
    version: str


class ErrorDetail(BaseModel):
    """Body of a structured error."""

    code: str = Field(..., description="Error code from ErrorCode")
    message: str = Field(..., description="Human-readable message")
    details: dict[str, Any] = Field(default_factory=dict, description="Additional context")


class ErrorResponse(BaseModel):
    """Error response envelope."""

    error: ErrorDetail
